# launchboard/api/v1/endpoints/economics.py
from fastapi import APIRouter, Depends

from launchboard.auth.dependencies import get_current_user
from launchboard.api.v1.schemas.users import SessionUser
from launchboard.core.unit_economics import UnitEconomicsInputs, UnitEconomicsResult, calculate_unit_economics

router = APIRouter()


@router.post("", response_model=UnitEconomicsResult)
async def unit_economics(
    inputs: UnitEconomicsInputs,
    current_user: SessionUser = Depends(get_current_user)
):
    """Per-deal economics with and without a sales person"""
    return calculate_unit_economics(inputs)
