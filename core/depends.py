import hmac
from typing import Annotated, AsyncGenerator, Optional

from fastapi import Depends, Header, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing_extensions import TypeAlias

from core.errors import UnauthorizedError
from core.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings

AppSettings: TypeAlias = Annotated[Settings, Depends(get_settings)]


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.session_factory() as session:
        yield session

AsyncDBSession: TypeAlias = Annotated[AsyncSession, Depends(get_session)]


def get_client_ip(request: Request) -> str:
    # Behind a reverse proxy the first X-Forwarded-For entry is the visitor
    forwarded_for = request.headers.get("x-forwarded-for", "")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    if request.client is None:
        return ""
    return request.client.host

ClientIP: TypeAlias = Annotated[str, Depends(get_client_ip)]


def keys_match(supplied: str, expected: str) -> bool:
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(
    settings: AppSettings,
    key: Annotated[Optional[str], Query()] = None,
    x_admin_key: Annotated[Optional[str], Header()] = None,
) -> None:
    supplied = key if key is not None else (x_admin_key or "")
    if not keys_match(supplied, settings.ADMIN_KEY):
        raise UnauthorizedError()
