"""Translation dictionary endpoint for clients that render labels themselves."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status

from moolaegis.i18n import get_translator, is_supported, normalize_language

router = APIRouter()


@router.get(
    "/{lang}",
    summary="Get Dictionary",
    description="Return the translation dictionary for a language. Aliases such as zh-TW or english are accepted.",
    responses={404: {"description": "Language not supported"}},
)
async def get_dictionary(lang: str) -> Dict[str, Any]:
    code = normalize_language(lang)
    if not is_supported(code):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Language '{lang}' is not supported")
    return get_translator(code).dictionary
