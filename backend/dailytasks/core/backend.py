import logging
from typing import AsyncIterator, Optional

from fastapi import Depends, WebSocket
from fastapi.security import OAuth2PasswordBearer
from supabase import AsyncClient, acreate_client

from .config import settings

logger = logging.getLogger(__name__)

# auto_error=False: the shared variant serves anonymous requests too.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/signin", auto_error=False)


async def create_backend_client(access_token: Optional[str] = None) -> AsyncClient:
    """Build a client for the remote store.

    With ``access_token`` the table queries run as that user, so the store's
    row-level policies see the caller rather than the anonymous role.
    """
    client = await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
    if access_token:
        client.postgrest.auth(access_token)
    logger.debug("Backend client ready url=%s user_scoped=%s", settings.SUPABASE_URL, bool(access_token))
    return client


async def close_backend_client(client: AsyncClient) -> None:
    """Close the HTTP sessions the client opened for table queries and auth."""
    try:
        await client.postgrest.aclose()
        await client.auth.close()
    except Exception:
        logger.warning("Backend client did not close cleanly", exc_info=True)


async def get_backend(token: Optional[str] = Depends(oauth2_scheme)) -> AsyncIterator[AsyncClient]:
    client = await create_backend_client(token)
    try:
        yield client
    finally:
        await close_backend_client(client)


async def get_socket_backend(websocket: WebSocket) -> AsyncIterator[AsyncClient]:
    # Browsers cannot set headers on a WebSocket handshake; the token rides in the query.
    client = await create_backend_client(websocket.query_params.get("token"))
    try:
        yield client
    finally:
        await close_backend_client(client)
