"""
Unit tests for the report history endpoints.

Tests cover uploading PDFs, listing, opening and deleting reports, and the
isolation between users.
"""

import pytest
from httpx import AsyncClient

from moolaegis.server.core.config import settings

pytestmark = pytest.mark.asyncio

API = "/api/v1/reports"
PDF = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\n%%EOF\n"


async def _upload(client: AsyncClient, headers, data=PDF, filename="q1.pdf", content_type="application/pdf", **form):
    return await client.post(API, files={"file": (filename, data, content_type)}, data=form, headers=headers)


class TestUpload:
    async def test_upload_success(self, client: AsyncClient, auth_headers):
        response = await _upload(client, auth_headers, title="Q1 Forecast")
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Q1 Forecast"
        assert data["type"] == "forecast"
        assert data["filename"] == "q1.pdf"
        assert data["size"] == len(PDF)
        assert "upload_time" in data

    async def test_title_defaults_to_filename(self, client: AsyncClient, auth_headers):
        response = await _upload(client, auth_headers, filename="budget-2025.pdf")
        assert response.json()["title"] == "budget-2025"

    async def test_not_a_pdf(self, client: AsyncClient, auth_headers):
        response = await _upload(client, auth_headers, data=b"\x89PNG....", filename="x.png", content_type="image/png")
        assert response.status_code == 415
        assert response.json()["code"] == "UNSUPPORTED_MEDIA_TYPE"

    async def test_empty_file(self, client: AsyncClient, auth_headers):
        response = await _upload(client, auth_headers, data=b"")
        assert response.status_code == 422
        assert response.json()["code"] == "EMPTY_UPLOAD"

    async def test_too_large(self, client: AsyncClient, auth_headers, monkeypatch):
        monkeypatch.setattr(settings, "report_max_bytes", 10)
        response = await _upload(client, auth_headers)
        assert response.status_code == 413
        assert response.json()["code"] == "PAYLOAD_TOO_LARGE"

    async def test_requires_authentication(self, client: AsyncClient):
        response = await _upload(client, {})
        assert response.status_code == 401


class TestListAndOpen:
    async def test_list_newest_first(self, client: AsyncClient, auth_headers):
        first = (await _upload(client, auth_headers, title="first")).json()
        second = (await _upload(client, auth_headers, title="second")).json()

        response = await client.get(f"{API}/", headers=auth_headers)
        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [second["id"], first["id"]]

        page = await client.get(f"{API}/", params={"limit": 1, "offset": 1}, headers=auth_headers)
        assert [r["id"] for r in page.json()] == [first["id"]]

    async def test_open_inline_and_download(self, client: AsyncClient, auth_headers):
        report = (await _upload(client, auth_headers)).json()

        inline = await client.get(f"{API}/{report['id']}/pdf", headers=auth_headers)
        assert inline.status_code == 200
        assert inline.content == PDF
        assert inline.headers["content-type"] == "application/pdf"
        assert inline.headers["content-disposition"].startswith("inline")

        download = await client.get(f"{API}/{report['id']}/pdf", params={"download": "true"}, headers=auth_headers)
        assert download.headers["content-disposition"].startswith("attachment")

    async def test_open_missing(self, client: AsyncClient, auth_headers):
        response = await client.get(f"{API}/999/pdf", headers=auth_headers)
        assert response.status_code == 404


class TestDelete:
    async def test_delete(self, client: AsyncClient, auth_headers):
        report = (await _upload(client, auth_headers)).json()
        response = await client.delete(f"{API}/{report['id']}", headers=auth_headers)
        assert response.status_code == 204
        assert (await client.get(f"{API}/", headers=auth_headers)).json() == []
        again = await client.delete(f"{API}/{report['id']}", headers=auth_headers)
        assert again.status_code == 404


class TestIsolation:
    async def test_other_users_cannot_see_or_delete(self, client: AsyncClient, auth_headers, register_user, login):
        report = (await _upload(client, auth_headers)).json()
        await register_user("bob", "bob@example.com", "secret2")
        bob = await login("bob", "secret2")

        assert (await client.get(f"{API}/", headers=bob)).json() == []
        assert (await client.get(f"{API}/{report['id']}/pdf", headers=bob)).status_code == 404
        assert (await client.delete(f"{API}/{report['id']}", headers=bob)).status_code == 404
        assert (await client.get(f"{API}/{report['id']}/pdf", headers=auth_headers)).status_code == 200
