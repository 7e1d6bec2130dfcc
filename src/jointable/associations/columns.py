"""
Mapping of join table columns onto the values written for a new join row.

Each column is assigned a ``ColumnRole`` once, from its name, and the
value for a given owner and record is then derived by ``column_value``.
The order of ``resolve_role`` checks is the precedence order.
"""
import enum
from typing import Any, Collection, Dict, Iterable, Optional

from jointable.core.records import has_attribute


class ColumnRole(enum.Enum):
    OWNER_FOREIGN_KEY = "owner_foreign_key"
    TARGET_FOREIGN_KEY = "target_foreign_key"
    TIMESTAMP = "timestamp"
    PASSTHROUGH = "passthrough"


def resolve_role(
    name: str,
    foreign_key: str,
    association_foreign_key: str,
    timestamps: Collection[str] = (),
) -> ColumnRole:
    if name == foreign_key:
        return ColumnRole.OWNER_FOREIGN_KEY
    if name == association_foreign_key:
        return ColumnRole.TARGET_FOREIGN_KEY
    if name in timestamps:
        return ColumnRole.TIMESTAMP
    return ColumnRole.PASSTHROUGH


def resolve_roles(
    names: Iterable[str],
    foreign_key: str,
    association_foreign_key: str,
    timestamps: Collection[str] = (),
) -> Dict[str, ColumnRole]:
    return {
        name: resolve_role(
            name, foreign_key, association_foreign_key, timestamps
        )
        for name in names
    }


def column_value(
    role: ColumnRole,
    name: str,
    owner_id: Any,
    record: Any,
    record_id: Any = None,
    now: Any = None,
) -> Optional[Any]:
    """
    Return the value a join row receives for column ``name``, or ``None``
    when the column should be left out of the INSERT.

    Parameters
    ----------
    role : ColumnRole
        The resolved role of the column.
    name : str
        The column name, used for passthrough lookups on ``record``.
    owner_id : any
        Identifier of the owning record.
    record : mapped instance
        The record being linked.
    record_id : any, optional
        Identifier of ``record``.
    now : datetime, optional
        Timestamp for timestamp columns, already in the record's timezone.
    """
    if role is ColumnRole.OWNER_FOREIGN_KEY:
        return owner_id
    if role is ColumnRole.TARGET_FOREIGN_KEY:
        return record_id
    if role is ColumnRole.TIMESTAMP:
        return now
    if has_attribute(record, name):
        return getattr(record, name)
    return None
