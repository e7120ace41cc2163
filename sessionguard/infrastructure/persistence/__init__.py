"""Persistence adapters: SQLAlchemy models, repositories, and in-memory stores."""

from sessionguard.infrastructure.persistence.base import BaseModel, BaseMutableModel
from sessionguard.infrastructure.persistence.database import Database
from sessionguard.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

__all__ = ["BaseModel", "BaseMutableModel", "Database", "SqlAlchemyUnitOfWork"]
