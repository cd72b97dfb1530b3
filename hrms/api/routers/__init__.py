"""Routers HTTP por familia de endpoints (montados bajo /api)."""
