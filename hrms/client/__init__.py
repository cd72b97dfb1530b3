"""Cliente HTTP del HRMS (httpx)."""

from .api_client import HRMSAPIError, HRMSClient, InMemoryTokenStore, TokenStore

__all__ = ["HRMSAPIError", "HRMSClient", "InMemoryTokenStore", "TokenStore"]
