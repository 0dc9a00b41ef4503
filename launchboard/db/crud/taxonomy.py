# launchboard/db/crud/taxonomy.py
"""Phase and category dictionaries"""
from typing import Optional, List, Dict, Any
from loguru import logger

from launchboard.db.gateway import DataGateway, Row

PHASES = "kanban_phases"
CATEGORIES = "kanban_categories"


async def list_entries(gateway: DataGateway, table: str) -> List[Row]:
    return await gateway.select(table, order=["position", "name"])


async def get_entry(gateway: DataGateway, table: str, entry_id: str) -> Optional[Row]:
    rows = await gateway.select(table, filters={"id": entry_id}, limit=1)
    return rows[0] if rows else None


async def create_entry(gateway: DataGateway, table: str, name: str) -> Row:
    """Append an entry after the current last one"""
    last = await gateway.select(table, order=["-position"], limit=1)
    position = last[0]["position"] + 1 if last else 0

    entry = await gateway.insert(table, {"name": name, "position": position})
    logger.info(f"Created {table} entry {name!r} at position {position}")
    return entry


async def update_entry(gateway: DataGateway, table: str, entry: Row, values: Dict[str, Any]) -> Row:
    if values:
        await gateway.update(table, entry["id"], values)
        logger.info(f"Updated {table} entry {entry['id']}: {sorted(values)}")
    return {**entry, **values}


async def delete_entry(gateway: DataGateway, table: str, entry_id: str) -> None:
    # Tasks keep their free-text phase/category label after the entry is gone
    await gateway.delete(table, entry_id)
    logger.info(f"Deleted {table} entry {entry_id}")
