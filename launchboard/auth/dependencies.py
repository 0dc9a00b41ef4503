# launchboard/auth/dependencies.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError
from loguru import logger
from typing import Optional

from launchboard.auth.security import decode_token
from launchboard.api.v1.schemas.users import SessionUser
from launchboard.db.crud import get_profile
from launchboard.db.gateway import DataGateway, get_gateway
from launchboard.db.models.enums import UserRole
from launchboard.exceptions.auth import AuthenticationError, TokenExpiredError, InsufficientRoleError

# Bearer token extraction; the provider's login flow lives outside this service
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
        gateway: DataGateway = Depends(get_gateway),
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> SessionUser:
    """
    Resolve the caller from the bearer token and their profile row.
    A missing profile leaves the caller with the plain user role.
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise AuthenticationError()

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("Invalid token payload - missing subject")
        raise AuthenticationError()

    profile = await get_profile(gateway, user_id)
    role = UserRole.USER
    if profile:
        try:
            role = UserRole(profile.get("role"))
        except ValueError:
            logger.warning(f"Profile {user_id} has unknown role {profile.get('role')!r}")

    user = SessionUser(
        id=user_id,
        email=(profile or {}).get("email") or payload.get("email"),
        display_name=(profile or {}).get("display_name"),
        role=role
    )
    logger.debug(f"User authenticated | user_id={user.id} | role={user.role.value}")
    return user


async def require_admin(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
    """Board access: admin or super_admin"""
    if not current_user.is_admin:
        logger.warning(f"Board access denied | user_id={current_user.id} | role={current_user.role.value}")
        raise InsufficientRoleError("admin")
    return current_user


async def require_super_admin(current_user: SessionUser = Depends(get_current_user)) -> SessionUser:
    """Taxonomy mutations: super_admin only"""
    if not current_user.is_super_admin:
        logger.warning(f"Super admin action denied | user_id={current_user.id}")
        raise InsufficientRoleError("super_admin")
    return current_user
