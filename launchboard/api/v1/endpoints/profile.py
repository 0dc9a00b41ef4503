# launchboard/api/v1/endpoints/profile.py
from fastapi import APIRouter, Depends

from launchboard.auth.dependencies import get_current_user
from launchboard.api.v1.schemas.users import SessionUser

router = APIRouter()


@router.get("/me", response_model=SessionUser)
async def read_current_user(current_user: SessionUser = Depends(get_current_user)):
    """Session user with the role from their profile"""
    return current_user
