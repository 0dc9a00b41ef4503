# launchboard/exceptions/auth.py
from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    """Base authentication error"""
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )


class TokenExpiredError(AuthenticationError):
    """Token has expired"""
    def __init__(self):
        super().__init__(detail="Token has expired")


class InsufficientRoleError(HTTPException):
    """Authenticated, but the profile role does not allow this"""
    def __init__(self, required: str = "admin"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Requires {required} role"
        )
