"""
Base module for all jointable specific exceptions.
"""


class JoinTableException(Exception):
    """Base exception for all manually thrown exceptions that do not
    fall within the core Python Exception classes.
    """

    pass


class AssociationTypeMismatch(JoinTableException):
    """
    Raised when a record of the wrong model is given to an association.
    """

    def __init__(self, expected, record):
        super().__init__(
            f"{expected.__name__} expected, got {type(record).__name__}"
        )
        self.expected = expected
        self.record = record


class RecordInvalid(JoinTableException):
    """
    Raised when a forced save encounters a record with validation errors.
    """

    def __init__(self, record, errors):
        super().__init__(
            f"Validation failed for {record!r}: {', '.join(errors)}"
        )
        self.record = record
        self.errors = list(errors)


class RecordNotFound(JoinTableException):
    """
    Raised when attempting to resolve model instances but the given
    identities do not match to any record within the association.
    """

    pass


class ReadOnlyRecord(JoinTableException):
    """
    Raised when flushing changes to a record loaded through an ambiguous
    join table scope.
    """

    def __init__(self, record):
        super().__init__(f"{record!r} is marked as readonly")
        self.record = record


class OwnerNotPersisted(JoinTableException):
    """
    Raised when an association is used on an owner that is not attached
    to a session.
    """

    pass


class InvalidSQLTemplate(JoinTableException):
    """
    Raised when a custom insert or delete statement references a bind
    parameter that cannot be resolved from the owner or the record.
    """

    def __init__(self, sql, unknown):
        names = ", ".join(sorted(unknown))
        super().__init__(f"Unknown placeholder(s) {names} in: {sql}")
        self.sql = sql
        self.unknown = frozenset(unknown)


class TargetModelNotFound(JoinTableException):
    """
    Raised when an association target given by name is not mapped in the
    owner's registry.
    """

    pass
