from configparser import ConfigParser
from typing import List, NamedTuple, Optional

import sqlalchemy as sa
from loguru import logger
from sqlalchemy import pool
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Session, sessionmaker

from jointable.core.constants import (
    CREDENTIALS_SECTION,
    DEFAULT_CONFIG_PATH,
    DEFAULT_DIALECT,
)
from jointable.core.engines import process_safe_engine


def credentials_from_config(config_path):
    """
    Read the ``Credentials`` section of an INI configuration file.

    Arguments
    ---------
    config_path : str or Path
        The path to the configuration file.

    Returns
    -------
    dict
        Keyword arguments for ``process_safe_engine``. Only
        ``database_name`` is required, everything else falls back to the
        driver defaults.
    """
    parser = ConfigParser()
    if not parser.read(config_path):
        raise FileNotFoundError(f"Could not read configuration {config_path}")
    section = parser[CREDENTIALS_SECTION]

    credentials = {
        "database_name": section["database_name"],
        "dialect": section.get("dialect", DEFAULT_DIALECT),
    }
    for key in ("username", "password", "database_host"):
        if key in section:
            credentials[key] = section[key]
    if "database_port" in section:
        credentials["database_port"] = section.getint("database_port")
    return credentials


def engine_from_config(config_path, **engine_kwargs):
    engine_kwargs.setdefault("poolclass", pool.NullPool)
    return process_safe_engine(
        **credentials_from_config(config_path), **engine_kwargs
    )


def db_from_config(config_path=DEFAULT_CONFIG_PATH, **engine_kwargs):
    """
    Create a DB session from a configuration file.

    Arguments
    ---------
    config_path : str or Path, optional
        The path to the configuration file.
        Defaults to ``~/.config/jointable/db.conf``.
    **engine_kwargs : keyword arguments, optional
        Arguments to pass off into engine construction.
    """
    engine = engine_from_config(config_path, **engine_kwargs)
    return sessionmaker(bind=engine)()


class ColumnDescriptor(NamedTuple):
    name: str
    type: sa.types.TypeEngine
    nullable: bool = True


class SessionConnection:
    """
    Statement execution and schema lookups for associations, routed
    through the owner's session so that everything shares one transaction.
    """

    def __init__(self, session: Session):
        self.session = session

    def _inspector(self):
        return sa.inspect(self.session.connection())

    def insert(self, statement):
        logger.trace(f"Inserting with {statement}")
        return self.session.execute(statement)

    def delete(self, statement):
        logger.trace(f"Deleting with {statement}")
        result = self.session.execute(statement)
        return result.rowcount

    def select(self, statement):
        logger.trace(f"Selecting with {statement}")
        return self.session.execute(statement)

    def columns(self, table_name: str) -> List[ColumnDescriptor]:
        reflected = self._inspector().get_columns(table_name)
        logger.debug(
            f"Reflected {len(reflected)} column(s) for {table_name}"
        )
        return [
            ColumnDescriptor(
                column["name"], column["type"], column.get("nullable", True)
            )
            for column in reflected
        ]

    def supports_primary_key(self) -> bool:
        try:
            self._inspector()
        except NoInspectionAvailable:
            return False
        return True

    def primary_key(self, table_name: str) -> Optional[List[str]]:
        constraint = self._inspector().get_pk_constraint(table_name)
        columns = constraint.get("constrained_columns") or []
        return columns if columns else None


JoinTable_Session = sessionmaker(expire_on_commit=False)

# Try and instantiate "global" jointable session
if not DEFAULT_CONFIG_PATH.exists():
    db = None
else:
    JoinTable_Session.configure(bind=engine_from_config(DEFAULT_CONFIG_PATH))
    db = JoinTable_Session()
