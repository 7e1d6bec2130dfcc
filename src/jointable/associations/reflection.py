"""
Static description of a join table association.

A reflection knows which models take part, which join table links them and
how its foreign keys are named. It resolves string targets through the
owner's declarative registry and caches the join table's reflected columns.
"""
from typing import Iterable, Optional

import sqlalchemy as sa
from loguru import logger

from jointable.core.records import column_attribute_names, primary_key_value
from jointable.exceptions import InvalidSQLTemplate, TargetModelNotFound
from jointable.util.inflection import foreign_key as default_foreign_key


class SQLTemplate:
    """
    A custom SQL statement with named bind parameters.

    Placeholders use SQLAlchemy's ``:name`` syntax and are checked against
    ``allowed`` on construction. ``owner_id`` and ``record_id`` resolve to
    primary keys, ``owner_<attr>`` and ``record_<attr>`` to mapped column
    attributes of the owner and the record respectively.

    >>> SQLTemplate(
    ...     "DELETE FROM developers_projects "
    ...     "WHERE developer_id = :owner_id AND project_id = :record_id",
    ...     allowed={"owner_id", "record_id"},
    ... ).placeholders == {"owner_id", "record_id"}
    True
    """

    def __init__(self, sql: str, allowed: Iterable[str]):
        self.sql = sql
        self.clause = sa.text(sql)
        self.placeholders = frozenset(self.clause.compile().params)
        unknown = self.placeholders - frozenset(allowed)
        if unknown:
            raise InvalidSQLTemplate(sql, unknown)

    @classmethod
    def for_models(cls, sql, owner_class, target_class):
        allowed = {"owner_id", "record_id"}
        allowed.update(
            f"owner_{name}" for name in column_attribute_names(owner_class)
        )
        allowed.update(
            f"record_{name}" for name in column_attribute_names(target_class)
        )
        return cls(sql, allowed)

    def _value(self, placeholder, owner, record):
        if placeholder == "owner_id":
            return primary_key_value(owner)
        if placeholder == "record_id":
            return primary_key_value(record)
        if placeholder.startswith("owner_"):
            return getattr(owner, placeholder[len("owner_"):])
        return getattr(record, placeholder[len("record_"):])

    def bind(self, owner, record):
        values = {
            placeholder: self._value(placeholder, owner, record)
            for placeholder in self.placeholders
        }
        return self.clause.bindparams(**values)

    def __repr__(self):
        return f"SQLTemplate({self.sql!r})"


class JoinTableReflection:
    def __init__(
        self,
        owner_class,
        name,
        target,
        join_table=None,
        foreign_key=None,
        association_foreign_key=None,
        insert_sql=None,
        delete_sql=None,
        select=None,
    ):
        self.owner_class = owner_class
        self.name = name
        self._target = target
        self._join_table_name = join_table
        self._foreign_key = foreign_key
        self._association_foreign_key = association_foreign_key
        self._insert_sql = insert_sql
        self._delete_sql = delete_sql
        self.select = tuple(select) if select is not None else None

        self._klass = None
        self._templates = None
        self._columns = None
        self._join_table = None

    def __repr__(self):
        return (
            f"JoinTableReflection({self.owner_class.__name__}.{self.name} "
            f"via {self._join_table_name or '?'})"
        )

    @property
    def klass(self):
        if self._klass is None:
            self._klass = self._resolve_target()
        return self._klass

    def _resolve_target(self):
        if not isinstance(self._target, str):
            return self._target
        for mapper in self.owner_class.registry.mappers:
            if mapper.class_.__name__ == self._target:
                return mapper.class_
        raise TargetModelNotFound(
            f"{self._target} is not mapped alongside "
            f"{self.owner_class.__name__}"
        )

    @property
    def join_table_name(self):
        if self._join_table_name is None:
            tables = sorted(
                (self.owner_class.__tablename__, self.klass.__tablename__)
            )
            self._join_table_name = "_".join(tables)
        return self._join_table_name

    @property
    def foreign_key(self):
        return self._foreign_key or default_foreign_key(
            self.owner_class.__name__
        )

    @property
    def association_foreign_key(self):
        return self._association_foreign_key or default_foreign_key(
            self.klass.__name__
        )

    def _build_templates(self):
        templates = {}
        for key, sql in (
            ("insert_sql", self._insert_sql),
            ("delete_sql", self._delete_sql),
        ):
            templates[key] = (
                SQLTemplate.for_models(sql, self.owner_class, self.klass)
                if sql is not None
                else None
            )
        return templates

    @property
    def insert_sql(self) -> Optional[SQLTemplate]:
        return self.finalize()["insert_sql"]

    @property
    def delete_sql(self) -> Optional[SQLTemplate]:
        return self.finalize()["delete_sql"]

    def finalize(self):
        """
        Resolve the target model and validate custom SQL templates.
        Safe to call repeatedly.
        """
        if self._templates is None:
            self._templates = self._build_templates()
            logger.debug(
                f"Finalized {self!r}: fk={self.foreign_key}, "
                f"afk={self.association_foreign_key}"
            )
        return self._templates

    def columns(self, connection):
        if self._columns is None:
            self._columns = connection.columns(self.join_table_name)
        return self._columns

    def reset_column_information(self):
        self._columns = None
        self._join_table = None

    def join_table(self, connection):
        """
        A lightweight table construct for the join table carrying the
        reflected column types.
        """
        if self._join_table is None:
            self._join_table = sa.table(
                self.join_table_name,
                *(
                    sa.column(column.name, column.type)
                    for column in self.columns(connection)
                ),
            )
        return self._join_table
