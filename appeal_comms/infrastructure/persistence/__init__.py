from .database import Database
from .repositories import SqlAlchemyAuditStore, SqlAlchemyDirectory, SqlAlchemyResourceRegistry

__all__ = [
    "Database",
    "SqlAlchemyAuditStore",
    "SqlAlchemyDirectory",
    "SqlAlchemyResourceRegistry",
]
