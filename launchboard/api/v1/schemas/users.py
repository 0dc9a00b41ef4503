# launchboard/api/v1/schemas/users.py
from pydantic import BaseModel, ConfigDict
from typing import Optional

from launchboard.db.models.enums import UserRole


class SessionUser(BaseModel):
    """Authenticated caller, built from the token and their profile row"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role in (UserRole.ADMIN, UserRole.SUPER_ADMIN)

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN
