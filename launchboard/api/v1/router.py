"""API v1 router"""
from fastapi import APIRouter
from .endpoints import board, tasks, taxonomy, economics, profile

api_router = APIRouter()
api_router.include_router(profile.router, tags=["profile"])
api_router.include_router(board.router, prefix="/board", tags=["board"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(taxonomy.phases_router, prefix="/phases", tags=["taxonomy"])
api_router.include_router(taxonomy.categories_router, prefix="/categories", tags=["taxonomy"])
api_router.include_router(economics.router, prefix="/unit-economics", tags=["unit-economics"])
