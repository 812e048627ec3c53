"""Token manager for issuing and validating JWT access tokens."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from jose import JWTError, jwt

from blogapi.configs import settings
from blogapi.monitoring import get_logger

logger = get_logger(__name__)


def create_access_token(user_id: UUID, expires_delta: timedelta | None = None) -> str:
    """
    Create a signed access token for ``user_id``.

    Args:
        user_id: Author's UUID, carried in the ``user_id`` claim
        expires_delta: Optional expiration time delta

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "user_id": str(user_id),
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": "access",
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> UUID | None:
    """
    Decode and validate an access token.

    Args:
        token: JWT token string

    Returns:
        UUID | None: The ``user_id`` claim, or None if the token is invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError as e:
        logger.debug("Rejected access token", reason=str(e))
        return None

    if payload.get("type") != "access":
        return None

    try:
        return UUID(str(payload.get("user_id")))
    except ValueError:
        return None
