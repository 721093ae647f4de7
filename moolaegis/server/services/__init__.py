"""Service layer used by the API routers."""
