import logging
from typing import Awaitable, Callable, List, Optional

from supabase import AsyncClient, AuthError

from dailytasks.core.errors import AuthFailure
from dailytasks.models.user import Principal

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Principal]], Awaitable[None]]

class SessionGate:
    """
    Sign-up / sign-in / sign-out against the backend's auth service.

    Listeners are awaited with the new principal after every successful
    sign-in (or sign-up that opens a session) and with ``None`` after sign-out.
    A failed attempt raises ``AuthFailure`` and notifies nobody.
    """

    def __init__(
        self,
        client: AsyncClient,
        principal: Optional[Principal] = None,
        access_token: Optional[str] = None,
    ):
        # principal/access_token restore a session verified elsewhere (a bearer token).
        self._client = client
        self._principal = principal
        self._access_token = access_token
        self._listeners: List[SessionListener] = []

    @property
    def current_principal(self) -> Optional[Principal]:
        return self._principal

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def require_principal(self) -> Principal:
        if self._principal is None:
            raise AuthFailure("Not signed in")
        return self._principal

    async def _set_session(self, principal: Optional[Principal], token: Optional[str]) -> None:
        self._principal = principal
        self._access_token = token
        for listener in list(self._listeners):
            await listener(principal)

    async def _accept(self, response) -> Optional[Principal]:
        session = getattr(response, "session", None)
        user = getattr(response, "user", None) or getattr(session, "user", None)
        if session is None or user is None:
            return None
        principal = Principal(id=str(user.id), email=getattr(user, "email", None))
        await self._set_session(principal, session.access_token)
        return principal

    async def sign_up(self, email: str, password: str) -> Optional[Principal]:
        """Register a new account.

        Returns ``None`` when the backend wants the address confirmed before
        it opens a session.
        """
        try:
            response = await self._client.auth.sign_up({"email": email, "password": password})
        except AuthError as e:
            logger.info("Sign-up rejected email=%s: %s", email, e)
            raise AuthFailure(str(e) or "Sign-up failed")
        except Exception:
            logger.exception("Sign-up failed email=%s", email)
            raise AuthFailure("Authentication service unavailable")

        principal = await self._accept(response)
        if principal is None:
            logger.info("Sign-up pending confirmation email=%s", email)
        else:
            logger.info("Signed up user=%s", principal.id)
        return principal

    async def sign_in(self, email: str, password: str) -> Principal:
        try:
            response = await self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            logger.info("Sign-in rejected email=%s: %s", email, e)
            raise AuthFailure(str(e) or "Incorrect email or password")
        except Exception:
            logger.exception("Sign-in failed email=%s", email)
            raise AuthFailure("Authentication service unavailable")

        principal = await self._accept(response)
        if principal is None:
            raise AuthFailure("Incorrect email or password")
        logger.info("Signed in user=%s", principal.id)
        return principal

    async def sign_out(self) -> None:
        """Revoke the session on the backend, then notify listeners with ``None``."""
        try:
            if self._access_token:
                await self._client.auth.admin.sign_out(self._access_token)
            else:
                await self._client.auth.sign_out()
        except Exception:
            # The local session is dropped regardless.
            logger.exception("Remote sign-out failed")
        previous = self._principal
        await self._set_session(None, None)
        logger.info("Signed out user=%s", previous.id if previous else None)
