"""
Name: Backend ASGI Entrypoint (hrms.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Preserve the import path used by uvicorn and tests

Notes/Constraints:
  - No configuration or IO should live here; keep it thin and predictable
  - `uvicorn hrms.main:app` is the deployment entrypoint
"""

from hrms.api.main import app

__all__ = ["app"]
