__version__ = "0.1.0"

from jointable.associations import (
    JoinTableAssociation,
    JoinTableReflection,
    has_and_belongs_to_many,
)
from jointable.core.base_model import JoinTableModel, TimestampMixin
from jointable.core.connection import db, db_from_config

__all__ = [
    "JoinTableAssociation",
    "JoinTableModel",
    "JoinTableReflection",
    "TimestampMixin",
    "db_from_config",
    "db",
    "has_and_belongs_to_many",
]
