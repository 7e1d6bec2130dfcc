from .builder import JoinTableCollection, has_and_belongs_to_many
from .columns import ColumnRole, column_value, resolve_role
from .join_table import JoinTableAssociation
from .reflection import JoinTableReflection, SQLTemplate
from .scope import AssociationScope

__all__ = [
    "AssociationScope",
    "ColumnRole",
    "JoinTableAssociation",
    "JoinTableCollection",
    "JoinTableReflection",
    "SQLTemplate",
    "column_value",
    "has_and_belongs_to_many",
    "resolve_role",
]
