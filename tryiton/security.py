import re
from fastapi import Header, HTTPException, status
from .config import settings


_SESSION_ID = re.compile(r"[A-Za-z0-9_-]{16,128}")


async def verify_api_key(authorization: str | None = Header(None), x_api_key: str | None = Header(None)) -> None:
    """Guards merchant write endpoints; shopper-facing routes stay public."""
    provided = None
    if x_api_key:
        provided = x_api_key
    elif authorization and authorization.lower().startswith("bearer "):
        provided = authorization.split(" ", 1)[1]
    if not provided or provided != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


async def widget_session(x_widget_session: str | None = Header(None)) -> str:
    """Opaque id the widget generates once per shopper browser; scopes the results cache."""
    if not x_widget_session or not _SESSION_ID.fullmatch(x_widget_session):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="x-widget-session header must be 16-128 characters of [A-Za-z0-9_-]")
    return x_widget_session
