# launchboard/db/gateway.py
"""
Remote data gateway: table CRUD used by every board feature.

Callers only see the async contract on DataGateway; SQLAlchemyGateway runs
it on SQLAlchemy Core against the service's own tables.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import MetaData, Table, delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from loguru import logger

from launchboard.db.database import AsyncSessionLocal, Base
from launchboard.db import models  # noqa: F401  (registers tables on Base.metadata)

Row = Dict[str, Any]


class GatewayError(Exception):
    """Transport or constraint failure reported by the data gateway"""

    def __init__(self, message: str, table: Optional[str] = None, operation: Optional[str] = None):
        super().__init__(message)
        self.table = table
        self.operation = operation

    def __str__(self):
        prefix = f"{self.operation} {self.table}: " if self.operation and self.table else ""
        return prefix + super().__str__()


class DataGateway(ABC):
    """Async table CRUD contract"""

    @abstractmethod
    async def select(
            self,
            table: str,
            filters: Optional[Mapping[str, Any]] = None,
            order: Optional[Sequence[str]] = None,
            limit: Optional[int] = None
    ) -> List[Row]:
        """Rows matching every equality filter; '-column' in order sorts descending"""

    @abstractmethod
    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """Store a row and return it with generated columns filled in"""

    @abstractmethod
    async def update(self, table: str, row_id: str, values: Mapping[str, Any]) -> None:
        """Partial update of one row by id"""

    @abstractmethod
    async def delete(self, table: str, row_id: str) -> None:
        """Delete one row by id"""

    @abstractmethod
    async def count(self, table: str, filters: Optional[Mapping[str, Any]] = None) -> int:
        """Number of rows matching every equality filter"""


class SQLAlchemyGateway(DataGateway):
    """DataGateway over SQLAlchemy Core and an async session factory"""

    def __init__(
            self,
            session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
            metadata: MetaData = Base.metadata
    ):
        self.session_factory = session_factory
        self.metadata = metadata

    def _table(self, name: str, operation: str) -> Table:
        table = self.metadata.tables.get(name)
        if table is None:
            raise GatewayError("unknown table", table=name, operation=operation)
        return table

    @staticmethod
    def _conditions(table: Table, filters: Optional[Mapping[str, Any]], operation: str) -> list:
        conditions = []
        for column_name, value in (filters or {}).items():
            if column_name not in table.c:
                raise GatewayError(f"unknown column '{column_name}'", table=table.name, operation=operation)
            column = table.c[column_name]
            conditions.append(column.is_(None) if value is None else column == value)
        return conditions

    async def select(self, table, filters=None, order=None, limit=None):
        target = self._table(table, "select")
        stmt = select(target).where(*self._conditions(target, filters, "select"))

        for key in order or ():
            descending = key.startswith("-")
            column_name = key.lstrip("-")
            if column_name not in target.c:
                raise GatewayError(f"unknown order column '{column_name}'", table=table, operation="select")
            column = target.c[column_name]
            stmt = stmt.order_by(column.desc() if descending else column.asc())

        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                return [dict(row._mapping) for row in result]
        except SQLAlchemyError as e:
            logger.error(f"Gateway select on {table} failed: {e}")
            raise GatewayError(str(e), table=table, operation="select") from e

    async def insert(self, table, row):
        target = self._table(table, "insert")
        stmt = insert(target).values(**dict(row)).returning(*target.c)

        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                stored = dict(result.one()._mapping)
                await session.commit()
                return stored
        except SQLAlchemyError as e:
            logger.error(f"Gateway insert into {table} failed: {e}")
            raise GatewayError(str(e), table=table, operation="insert") from e

    async def update(self, table, row_id, values):
        target = self._table(table, "update")
        stmt = update(target).where(target.c.id == row_id).values(**dict(values))

        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Gateway update of {table}/{row_id} failed: {e}")
            raise GatewayError(str(e), table=table, operation="update") from e

        if result.rowcount == 0:
            logger.debug(f"Gateway update of {table}/{row_id} matched no rows")

    async def delete(self, table, row_id):
        target = self._table(table, "delete")
        stmt = delete(target).where(target.c.id == row_id)

        try:
            async with self.session_factory() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Gateway delete of {table}/{row_id} failed: {e}")
            raise GatewayError(str(e), table=table, operation="delete") from e

    async def count(self, table, filters=None):
        target = self._table(table, "count")
        stmt = select(func.count()).select_from(target).where(*self._conditions(target, filters, "count"))

        try:
            async with self.session_factory() as session:
                return int(await session.scalar(stmt) or 0)
        except SQLAlchemyError as e:
            logger.error(f"Gateway count on {table} failed: {e}")
            raise GatewayError(str(e), table=table, operation="count") from e


_default_gateway: Optional[DataGateway] = None


def get_gateway() -> DataGateway:
    """FastAPI dependency returning the process-wide gateway"""
    global _default_gateway
    if _default_gateway is None:
        _default_gateway = SQLAlchemyGateway()
    return _default_gateway
