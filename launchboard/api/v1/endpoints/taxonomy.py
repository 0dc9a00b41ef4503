# launchboard/api/v1/endpoints/taxonomy.py
"""Phase and category management; reads for board admins, writes for super admins"""
from fastapi import APIRouter, Depends, HTTPException, Path, status
from typing import List
from loguru import logger

from launchboard.auth.dependencies import require_admin, require_super_admin
from launchboard.api.v1.schemas.taxonomy import TaxonomyCreate, TaxonomyUpdate, TaxonomyResponse
from launchboard.api.v1.schemas.users import SessionUser
from launchboard.db import crud
from launchboard.db.gateway import DataGateway, GatewayError, get_gateway
from launchboard.exceptions.board import TaxonomyEntryNotFoundError, GatewayUnavailableError


def build_taxonomy_router(table: str, kind: str) -> APIRouter:
    """Same CRUD surface for both ordered dictionaries"""
    router = APIRouter()

    async def existing(gateway: DataGateway, entry_id: str):
        entry = await crud.taxonomy.get_entry(gateway, table, entry_id)
        if not entry:
            raise TaxonomyEntryNotFoundError(entry_id, kind=kind)
        return entry

    @router.get("", response_model=List[TaxonomyResponse])
    async def list_entries(
        gateway: DataGateway = Depends(get_gateway),
        current_user: SessionUser = Depends(require_admin)
    ):
        try:
            return await crud.taxonomy.list_entries(gateway, table)
        except GatewayError as e:
            logger.error(f"Failed to list {kind.lower()} entries: {e}")
            raise GatewayUnavailableError()

    @router.post("", response_model=TaxonomyResponse, status_code=status.HTTP_201_CREATED)
    async def create_entry(
        data: TaxonomyCreate,
        gateway: DataGateway = Depends(get_gateway),
        current_user: SessionUser = Depends(require_super_admin)
    ):
        try:
            return await crud.taxonomy.create_entry(gateway, table, data.name)
        except GatewayError as e:
            logger.error(f"Failed to create {kind.lower()} {data.name!r}: {e}")
            raise GatewayUnavailableError()

    @router.put("/{entry_id}", response_model=TaxonomyResponse)
    async def update_entry(
        data: TaxonomyUpdate,
        entry_id: str = Path(...),
        gateway: DataGateway = Depends(get_gateway),
        current_user: SessionUser = Depends(require_super_admin)
    ):
        try:
            entry = await existing(gateway, entry_id)
            values = data.model_dump(exclude_unset=True, exclude_none=True)
            if "name" in values:
                values["name"] = values["name"].strip()
            return await crud.taxonomy.update_entry(gateway, table, entry, values)
        except HTTPException:
            raise
        except GatewayError as e:
            logger.error(f"Failed to update {kind.lower()} {entry_id}: {e}")
            raise GatewayUnavailableError()

    @router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_entry(
        entry_id: str = Path(...),
        gateway: DataGateway = Depends(get_gateway),
        current_user: SessionUser = Depends(require_super_admin)
    ):
        try:
            await existing(gateway, entry_id)
            await crud.taxonomy.delete_entry(gateway, table, entry_id)
        except HTTPException:
            raise
        except GatewayError as e:
            logger.error(f"Failed to delete {kind.lower()} {entry_id}: {e}")
            raise GatewayUnavailableError()

    return router


phases_router = build_taxonomy_router(crud.taxonomy.PHASES, "Phase")
categories_router = build_taxonomy_router(crud.taxonomy.CATEGORIES, "Category")
