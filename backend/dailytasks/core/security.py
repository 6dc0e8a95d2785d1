import logging

from jose import JWTError, jwt

from dailytasks.models.user import Principal
from .config import settings
from .errors import InvalidToken

logger = logging.getLogger(__name__)

def decode_access_token(token: str) -> Principal:
    """Verify an access token issued by the backend's auth service."""
    if not token:
        raise InvalidToken()
    if not settings.SUPABASE_JWT_SECRET:
        logger.error("SUPABASE_JWT_SECRET is not set; cannot verify access tokens")
        raise InvalidToken()
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.SUPABASE_JWT_AUDIENCE,
        )
    except JWTError as e:
        logger.info("JWT validation error: %s", e)
        raise InvalidToken()

    user_id = payload.get("sub")
    if not user_id:
        logger.info("Token missing 'sub'")
        raise InvalidToken()
    return Principal(id=str(user_id), email=payload.get("email"))
