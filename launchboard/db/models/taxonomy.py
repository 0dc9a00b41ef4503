# launchboard/db/models/taxonomy.py
"""Ordered tag dictionaries used to label and filter board tasks"""
from sqlalchemy import Column, Integer, String

from launchboard.db.models.base import Base, CreatedAtMixin, StringIDMixin


class Phase(Base, StringIDMixin, CreatedAtMixin):
    __tablename__ = "kanban_phases"

    name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Phase name={self.name}>"


class Category(Base, StringIDMixin, CreatedAtMixin):
    __tablename__ = "kanban_categories"

    name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Category name={self.name}>"
