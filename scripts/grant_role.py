"""
Grant a board role to an auth-provider user
"""
import argparse
import asyncio

from loguru import logger

from launchboard.db.crud import get_profile
from launchboard.db.gateway import SQLAlchemyGateway
from launchboard.db.models.enums import UserRole


async def grant_role(user_id: str, role: UserRole, email: str = None):
    """Set the profile role, creating the profile row when it is missing"""
    gateway = SQLAlchemyGateway()

    profile = await get_profile(gateway, user_id)
    if profile is None:
        await gateway.insert("profiles", {"id": user_id, "email": email, "role": role.value})
        logger.info(f"Created profile {user_id} with role {role.value}")
        return

    if profile["role"] == role.value:
        logger.warning(f"Profile {user_id} already has role {role.value}")
        return

    await gateway.update("profiles", user_id, {"role": role.value})
    logger.info(f"Profile {user_id}: {profile['role']} -> {role.value}")


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("user_id", help="Auth provider user id (token 'sub')")
    parser.add_argument("--role", choices=[r.value for r in UserRole], default=UserRole.ADMIN.value)
    parser.add_argument("--email")
    args = parser.parse_args()

    asyncio.run(grant_role(args.user_id, UserRole(args.role), args.email))


if __name__ == "__main__":
    main()
