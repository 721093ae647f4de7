"""Moolaegis.

This package contains a three-statement financial forecasting service: users
submit a base-year income statement and balance sheet together with growth and
turnover assumptions, and the service projects linked income statements,
balance sheets and cash-flow statements over a short horizon.

High-level architecture
-----------------------

- ``moolaegis.forecast``:

  - Pydantic domain models for base-year inputs and assumptions.
  - ``run_forecast``: the deterministic projection with cash, working-capital
    and PPE roll-forwards.
  - Derived analysis (balance check, ratios, cash conversion cycle,
    common-size views) and number formatting.

- ``moolaegis.i18n``: dictionary-based string lookup for ``en`` and ``zh``.

- ``moolaegis.core``: logging, monitoring, error types, password hashing and
  JWT handling, and the SQLModel persistence layer.

- ``moolaegis.server``: the FastAPI application exposing auth, feedback,
  report history, forecasting, chat and OCR endpoints.

Typical workflow
----------------

1. Register and log in to obtain an access/refresh token pair.
2. ``POST /api/v1/forecast`` with base financials and assumptions.
3. ``POST /api/v1/forecast/pdf?save=true`` to render the report and store it
   in the user's report history.
4. List, open or delete stored reports under ``/api/v1/reports``.
"""
