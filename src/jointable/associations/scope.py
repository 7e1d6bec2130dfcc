from typing import Any, Iterable, List, Optional

import sqlalchemy as sa
from loguru import logger
from sqlalchemy.orm import Session

from jointable.core.records import primary_key_column
from jointable.exceptions import RecordNotFound


class AssociationScope:
    """
    The queryable set of records behind a collection association.

    Scopes are immutable, every refinement returns a new scope. Records
    first loaded into the session by a readonly scope are marked readonly
    and refuse to flush.
    """

    def __init__(
        self,
        model,
        statement: sa.Select,
        session: Session,
        readonly: bool = False,
    ):
        self.model = model
        self.statement = statement
        self.session = session
        self._readonly = readonly

    def _spawn(self, statement=None, readonly=None):
        return type(self)(
            self.model,
            self.statement if statement is None else statement,
            self.session,
            self._readonly if readonly is None else readonly,
        )

    @property
    def is_readonly(self) -> bool:
        return self._readonly

    def readonly(self, value: bool = True) -> "AssociationScope":
        return self._spawn(readonly=value)

    def joins(self, clause) -> "AssociationScope":
        return self._spawn(statement=self.statement.select_from(clause))

    def where(self, *criteria) -> "AssociationScope":
        return self._spawn(statement=self.statement.where(*criteria))

    def _load(self, statement) -> List[Any]:
        # Instances already in the identity map are not populated from
        # the joined row and stay writable
        known = set(self.session.identity_map.keys())
        records = self.session.execute(statement).scalars().all()
        if self._readonly:
            for record in records:
                if sa.inspect(record).key not in known:
                    record.mark_readonly()
        return list(records)

    def all(self) -> List[Any]:
        return self._load(self.statement)

    def first(self) -> Optional[Any]:
        records = self._load(self.statement.limit(1))
        return records[0] if records else None

    def count(self) -> int:
        pk = primary_key_column(self.model)
        statement = self.statement.with_only_columns(
            sa.func.count(pk), maintain_column_froms=False
        )
        return self.session.execute(statement).scalar_one()

    def find(
        self,
        *ids,
        select: Optional[Iterable[Any]] = None,
        where: Optional[Iterable[Any]] = None,
    ):
        """
        Find records within the scope.

        Parameters
        ----------
        *ids : any
            Primary keys to look for. With no ids every record in the scope
            is returned.
        select : iterable, optional
            Replace the selected columns. The first selected element must
            yield model instances.
        where : iterable, optional
            Additional criteria.

        Returns
        -------
        A single record when exactly one id is given, otherwise a list.

        Raises
        ------
        RecordNotFound
            If any requested id is not within the scope.
        """
        statement = self.statement
        if select is not None:
            statement = statement.with_only_columns(*select)
        if where is not None:
            statement = statement.where(*where)
        if ids:
            statement = statement.where(primary_key_column(self.model).in_(ids))

        records = self._load(statement)
        if not ids:
            return records

        wanted = set(ids)
        if len(records) < len(wanted):
            logger.debug(
                f"Found {len(records)} of {len(wanted)} requested "
                f"{self.model.__name__} record(s)"
            )
            raise RecordNotFound(
                f"Couldn't find all {self.model.__name__} with ids {ids}"
            )
        if len(ids) == 1:
            return records[0]
        return records
