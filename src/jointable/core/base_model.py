import datetime
from typing import List

import sqlalchemy as sa
from sqlalchemy import orm
from sqlalchemy.event import listens_for

from jointable.core.constants import DEFAULT_TIMEZONE, TIMESTAMP_ATTRIBUTES
from jointable.exceptions import ReadOnlyRecord


class JoinTableModel(orm.DeclarativeBase):
    """
    A common SQLAlchemy base model for models taking part in join table
    associations.

    Subclasses may override ``record_timestamps`` to opt out of timestamp
    bookkeeping on join rows, ``default_timezone`` to stamp join rows with
    local time, and ``validation_errors`` to veto saves.
    """

    record_timestamps = True
    default_timezone = DEFAULT_TIMEZONE

    def validation_errors(self) -> List[str]:
        return []

    def is_valid(self) -> bool:
        return not self.validation_errors()

    @classmethod
    def all_timestamp_attributes(cls):
        return TIMESTAMP_ATTRIBUTES

    def current_time_from_proper_timezone(self) -> datetime.datetime:
        if self.default_timezone == "utc":
            return datetime.datetime.now(datetime.timezone.utc)
        return datetime.datetime.now()

    @property
    def readonly(self) -> bool:
        return self.__dict__.get("_jointable_readonly", False)

    def mark_readonly(self):
        self.__dict__["_jointable_readonly"] = True


class TimestampMixin:
    """
    Mixin for models tracking creation and modification times.
    """

    created_at: orm.Mapped[datetime.datetime] = orm.mapped_column(
        server_default=sa.func.now()
    )
    updated_at: orm.Mapped[datetime.datetime] = orm.mapped_column(
        server_default=sa.func.now(), onupdate=sa.func.now()
    )


@listens_for(orm.Session, "before_flush")
def reject_readonly_changes(session, flush_context, instances):
    for instance in session.deleted:
        if getattr(instance, "readonly", False):
            raise ReadOnlyRecord(instance)
    for instance in session.dirty:
        if getattr(instance, "readonly", False) and session.is_modified(
            instance
        ):
            raise ReadOnlyRecord(instance)
