"""Database scope decorators for automatic session management.

This module provides decorators that simplify database session handling
by automatically managing connection lifecycles, keeping association
work separated from session bookkeeping.
"""

from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from loguru import logger
from sqlalchemy.orm.session import sessionmaker as SessionMaker

from jointable.core.connection import JoinTable_Session

F = TypeVar("F", bound=Callable[..., Any])


def db_scope(
    session_factory: Optional[SessionMaker] = None,
    application_name: Optional[str] = None,
    **session_kwargs: Any,
) -> Callable[[F], F]:
    """Decorator that provides automatic database session management.

    The decorated function receives an open database session as its first
    argument. The session is closed when the function returns, rolling
    back anything left uncommitted.

    Parameters
    ----------
    session_factory : sqlalchemy.orm.sessionmaker, optional
        A SQLAlchemy sessionmaker instance for creating database sessions.
        If not provided, defaults to the global JoinTable_Session.
    application_name : str, optional
        Name used for logging purposes to identify the calling function.
        If not provided, uses the wrapped function's name.
    **session_kwargs : dict
        Additional keyword arguments passed to the session factory, such
        as ``bind`` to override the engine.

    Examples
    --------
    >>> @db_scope(bind=engine)
    ... def link(session, developer_id, project_id):
    ...     developer = session.get(Developer, developer_id)
    ...     developer.projects.append(session.get(Project, project_id))
    ...     session.commit()
    """

    def _internal(func):
        _session_factory = (
            session_factory
            if session_factory is not None
            else JoinTable_Session
        )
        app_name = application_name if application_name else func.__name__
        session_creation_kwargs = session_kwargs.copy()

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger.trace(
                f"Entering db context for {app_name} ({func}) "
                f"with {args} and {kwargs}"
            )
            with _session_factory(**session_creation_kwargs) as session:
                func_results = func(session, *args, **kwargs)
            logger.trace(f"Exited db context for {app_name} ({func})")
            return func_results

        return wrapper

    return _internal
