from typing import Any, List

import sqlalchemy as sa
from loguru import logger
from sqlalchemy import orm

from jointable.associations.scope import AssociationScope
from jointable.core.connection import SessionConnection
from jointable.core.records import (
    is_new_record,
    primary_key_column,
    primary_key_value,
)
from jointable.exceptions import (
    AssociationTypeMismatch,
    OwnerNotPersisted,
    RecordInvalid,
)


class CollectionAssociation:
    """
    Base class for associations presenting a collection of target records
    on an owner.

    Subclasses implement ``insert_record``, ``delete_records`` and the
    scope construction hooks. The loaded collection is kept in ``target``
    and is reset by ``reset`` or ``reload``.
    """

    def __init__(self, owner, reflection, session=None):
        self.owner = owner
        self.reflection = reflection
        self._session = session
        self.target: List[Any] = []
        self.loaded = False
        reflection.finalize()

    def __repr__(self):
        return (
            f"<{type(self).__name__} {type(self.owner).__name__}."
            f"{self.reflection.name} loaded={self.loaded}>"
        )

    @property
    def session(self) -> orm.Session:
        session = self._session or orm.object_session(self.owner)
        if session is None:
            raise OwnerNotPersisted(
                f"{self.owner!r} is not attached to a session"
            )
        return session

    @property
    def connection(self) -> SessionConnection:
        return SessionConnection(self.session)

    @property
    def owner_id(self):
        if is_new_record(self.owner):
            logger.debug(f"Flushing unsaved owner {self.owner!r}")
            self.session.add(self.owner)
            self.session.flush()
        return primary_key_value(self.owner)

    def raise_on_type_mismatch(self, record):
        if not isinstance(record, self.reflection.klass):
            raise AssociationTypeMismatch(self.reflection.klass, record)

    def save_record(self, record, force=True, validate=True):
        if validate:
            errors = record.validation_errors()
            if errors:
                if force:
                    raise RecordInvalid(record, errors)
                logger.debug(f"Refusing to save {record!r}: {errors}")
                return False
        self.session.add(record)
        self.session.flush()
        return True

    # Scoping
    def select_value(self):
        return self.reflection.select

    def construct_owner_conditions(self, table):
        return table.c[self.reflection.foreign_key] == self.owner_id

    def association_scope(self) -> AssociationScope:
        statement = sa.select(*self.select_value())
        return AssociationScope(self.reflection.klass, statement, self.session)

    def scoped(self) -> AssociationScope:
        return self.association_scope()

    def find_by_sql(self, *ids, **options):
        return self.scoped().find(*ids, **options)

    def find(self, *ids, **options):
        return self.find_by_sql(*ids, **options)

    # Target management
    def find_target(self):
        return self.scoped().all()

    def load_target(self):
        if not self.loaded:
            self.target = self.find_target()
            self.loaded = True
        return self.target

    def reset(self):
        self.target = []
        self.loaded = False

    def reload(self):
        self.reset()
        return self.load_target()

    def count_records(self):
        raise NotImplementedError

    def size(self):
        return self.count_records()

    def __len__(self):
        return self.size()

    def __iter__(self):
        return iter(self.load_target())

    def __contains__(self, record):
        return self.include(record)

    def include(self, record):
        if not isinstance(record, self.reflection.klass):
            return False
        if is_new_record(record):
            return record in self.target
        if self.loaded:
            return record in self.target
        pk = primary_key_column(self.reflection.klass)
        scope = self.scoped().where(pk == primary_key_value(record))
        return scope.count() > 0

    def append(self, *records):
        for record in records:
            self.raise_on_type_mismatch(record)
        for record in records:
            if not self.insert_record(record):
                logger.debug(f"Could not append {record!r}")
                continue
            if self.loaded and record not in self.target:
                self.target.append(record)
        return self

    def delete(self, *records):
        for record in records:
            self.raise_on_type_mismatch(record)
        existing = [record for record in records if not is_new_record(record)]
        if existing:
            self.delete_records(existing)
        self.target = [
            record for record in self.target if record not in records
        ]
        return self

    def clear(self):
        self.delete(*self.load_target())
        return self

    def replace(self, records):
        records = list(records)
        current = list(self.load_target())
        stale = [record for record in current if record not in records]
        fresh = [record for record in records if record not in current]
        if stale:
            self.delete(*stale)
        if fresh:
            self.append(*fresh)
        return self

    def insert_record(self, record, force=True, validate=True):
        raise NotImplementedError

    def delete_records(self, records):
        raise NotImplementedError
