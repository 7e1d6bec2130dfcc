from typing import Dict

import sqlalchemy as sa
from loguru import logger

from jointable.associations.collection import CollectionAssociation
from jointable.associations.columns import (
    ColumnRole,
    column_value,
    resolve_roles,
)
from jointable.core.records import (
    is_new_record,
    primary_key_column,
    primary_key_value,
)


class JoinTableAssociation(CollectionAssociation):
    """
    Has and belongs to many association.

    Owner and target records are linked by rows of a join table holding
    both foreign keys. Appending a record inserts a join row, deleting
    removes it; the target records themselves are never deleted.
    """

    def __init__(self, owner, reflection, session=None):
        super().__init__(owner, reflection, session=session)
        self._has_primary_key = None
        self._roles: Dict[type, Dict[str, ColumnRole]] = {}

    def columns(self):
        return self.reflection.columns(self.connection)

    def reset_column_information(self):
        self.reflection.reset_column_information()
        self._roles.clear()

    @property
    def join_table(self):
        return self.reflection.join_table(self.connection)

    def has_primary_key(self) -> bool:
        if self._has_primary_key is None:
            connection = self.connection
            self._has_primary_key = bool(
                connection.supports_primary_key()
                and connection.primary_key(self.reflection.join_table_name)
            )
        return self._has_primary_key

    def count_records(self):
        return len(self.load_target())

    def column_roles(self, record) -> Dict[str, ColumnRole]:
        model = type(record)
        if model not in self._roles:
            self._roles[model] = resolve_roles(
                (column.name for column in self.columns()),
                self.reflection.foreign_key,
                self.reflection.association_foreign_key,
                self.record_timestamp_columns(record),
            )
        return self._roles[model]

    def insert_record(self, record, force=True, validate=True):
        if is_new_record(record):
            if not self.save_record(record, force, validate):
                return False

        owner_id = self.owner_id
        template = self.reflection.insert_sql
        if template is not None:
            self.connection.insert(template.bind(self.owner, record))
            return True

        roles = self.column_roles(record)
        now = None
        if ColumnRole.TIMESTAMP in roles.values():
            now = record.current_time_from_proper_timezone()

        record_id = primary_key_value(record)
        values = {}
        for name, role in roles.items():
            value = column_value(
                role, name, owner_id, record, record_id=record_id, now=now
            )
            if value is not None:
                values[name] = value

        statement = sa.insert(self.join_table).values(values)
        self.connection.insert(statement)
        return True

    def delete_records(self, records):
        template = self.reflection.delete_sql
        if template is not None:
            for record in records:
                self.connection.delete(template.bind(self.owner, record))
            return

        relation = self.join_table
        ids = [primary_key_value(record) for record in records]
        statement = sa.delete(relation).where(
            sa.and_(
                self.construct_owner_conditions(relation),
                relation.c[self.reflection.association_foreign_key].in_(
                    [_id for _id in ids if _id is not None]
                ),
            )
        )
        self.connection.delete(statement)

    def construct_joins(self):
        right = self.join_table
        left = self.reflection.klass.__table__

        condition = primary_key_column(self.reflection.klass) == (
            right.c[self.reflection.association_foreign_key]
        )
        return sa.join(left, right, condition)

    def construct_owner_conditions(self, table=None):
        return super().construct_owner_conditions(
            self.join_table if table is None else table
        )

    def association_scope(self):
        scope = super().association_scope().joins(self.construct_joins())
        scope = scope.where(self.construct_owner_conditions())
        if self.ambiguous_select(self.reflection.select):
            logger.debug(
                f"{self.reflection.join_table_name} carries extra columns, "
                f"records loaded through {self!r} are readonly"
            )
            scope = scope.readonly()
        return scope

    def select_value(self):
        return super().select_value() or (
            self.reflection.klass,
            self.join_table,
        )

    def ambiguous_select(self, select) -> bool:
        """
        Join tables with additional columns on top of the two foreign keys
        are ambiguous unless a select has been given explicitly: extra
        columns such as an ``id`` would shadow the target's own.
        """
        return self.extra_join_columns() and select is None

    def extra_join_columns(self) -> bool:
        return len(self.columns()) > 2

    def record_timestamp_columns(self, record):
        if record.record_timestamps:
            return [str(name) for name in record.all_timestamp_attributes()]
        return []

    def invertible_for(self, record) -> bool:
        return False

    def find_by_sql(self, *ids, **options):
        ambiguous = self.ambiguous_select(
            self.reflection.select or options.get("select")
        )
        return self.scoped().readonly(ambiguous).find(*ids, **options)
