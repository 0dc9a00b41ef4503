# launchboard/db/crud/profile.py
from typing import Optional
from loguru import logger

from launchboard.db.gateway import DataGateway, Row

PROFILES = "profiles"


async def get_profile(gateway: DataGateway, user_id: str) -> Optional[Row]:
    """Get the profile row for an auth-provider user id"""
    try:
        rows = await gateway.select(PROFILES, filters={"id": user_id}, limit=1)
        return rows[0] if rows else None
    except Exception as e:
        logger.error(f"Error retrieving profile {user_id}: {e}")
        return None
