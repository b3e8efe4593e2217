from __future__ import annotations

from fastapi import Header, HTTPException

from backend.settings import get_settings


async def require_backend_token(
    x_backend_token: str | None = Header(default=None, alias="X-Backend-Token"),
) -> None:
    settings = get_settings()
    if not settings.token_required:
        return None
    if not x_backend_token or x_backend_token != settings.backend_session_secret:
        raise HTTPException(status_code=401, detail="Invalid backend token")
    return None
