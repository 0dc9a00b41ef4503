"""CRUD operations over the data gateway"""
from .profile import get_profile
from . import task
from . import taxonomy

__all__ = [
    "get_profile",
    "task",
    "taxonomy",
]
