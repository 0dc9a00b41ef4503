# launchboard/db/models/profile.py
from sqlalchemy import Column, String, Index

from launchboard.db.models.base import Base, TimestampMixin
from launchboard.db.models.enums import UserRole


class Profile(Base, TimestampMixin):
    """Profile row keyed by the auth provider's user id"""
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=True)
    display_name = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default=UserRole.USER.value)

    __table_args__ = (
        Index('idx_profile_role', 'role'),
    )

    def __repr__(self):
        return f"<Profile email={self.email} role={self.role}>"
