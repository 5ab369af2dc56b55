"""
Service-to-service guard for the order read-back endpoint.

Order records carry customer contact details, so they are only served to
callers presenting the cluster's X-Internal-API-Key header. A missing
INTERNAL_API_KEY falls back to an insecure default with a loud warning so
local runs still work.
"""
import os
import secrets
import warnings

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

INTERNAL_API_KEY: str = os.getenv("INTERNAL_API_KEY", "")

if not INTERNAL_API_KEY:
    warnings.warn(
        "INTERNAL_API_KEY is not set. Order read-back uses an insecure default key. "
        "Set this env var in production!",
        stacklevel=2,
    )
    INTERNAL_API_KEY = "insecure-default-change-me"

api_key_header = APIKeyHeader(name="X-Internal-API-Key", auto_error=False)


def verify_api_key(provided_key: str | None) -> bool:
    """Constant-time comparison against the configured key."""
    if not provided_key:
        return False
    return secrets.compare_digest(str(provided_key), INTERNAL_API_KEY)


async def verify_internal_api_key(api_key: str | None = Depends(api_key_header)) -> bool:
    if not verify_api_key(api_key):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or missing X-Internal-API-Key header"
        )
    return True
