# launchboard/auth/security.py
"""
Verification of access tokens issued by the hosted auth provider.

The service never issues tokens itself; it only checks the provider's HS256
signature, expiry and audience.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from loguru import logger

from launchboard.core.config import settings


def decode_token(token: str) -> dict:
    """
    Decodes a provider access token and returns its payload.
    Raises JWTError if the token is invalid, expired or for another audience.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE
        )
        return payload
    except JWTError as e:
        logger.warning(f"JWT decoding error: {e}")
        raise


def create_access_token(
        user_id: str,
        email: Optional[str] = None,
        expires_delta: Optional[timedelta] = None
) -> str:
    """
    Signs a token shaped like the provider's.
    Used by local tooling and tests; production tokens come from the provider.
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode = {"sub": user_id, "email": email, "aud": settings.JWT_AUDIENCE, "exp": expire}

    return jwt.encode(
        to_encode, settings.JWT_SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM
    )
