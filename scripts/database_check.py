"""
Database connectivity and board health check script
"""
import asyncio
from collections import Counter

from loguru import logger

from launchboard.board.store import TaskStore
from launchboard.db.gateway import SQLAlchemyGateway


async def check_database():
    """Check connectivity, count rows per column and report rows the board would reject"""
    logger.info("Checking database connectivity...")
    gateway = SQLAlchemyGateway()

    try:
        store = await TaskStore.load(gateway)
        logger.info("Database connection successful")

        per_column = Counter(t.status.label for t in store.tasks)
        logger.info(f"Tasks on board: {len(store)}")
        for label, count in sorted(per_column.items()):
            logger.info(f"   {label}: {count}")

        logger.info(f"Comments: {await gateway.count('task_comments')}")
        logger.info(f"Activity entries: {await gateway.count('task_activity')}")

        for row in store.quarantined:
            logger.warning(f"Row {row.row_id} kept off the board: {row.reason}")

    except Exception as e:
        logger.error(f"Database check failed: {e}")
        raise


if __name__ == "__main__":
    asyncio.run(check_database())
