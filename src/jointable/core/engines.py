import os

import sqlalchemy as sa
from sqlalchemy import create_engine
from sqlalchemy.event import listens_for
from sqlalchemy.exc import DisconnectionError


def __register_process_guards__(engine):
    """Add SQLAlchemy process guards to the given engine"""

    @listens_for(engine, "connect")
    def connect(dbapi_connection, connection_record):
        connection_record.info["pid"] = os.getpid()

    @listens_for(engine, "checkout")
    def checkout(dbapi_connection, connection_record, connection_proxy):
        pid = os.getpid()
        if connection_record.info["pid"] != pid:
            connection_record.connection = connection_proxy.connection = None
            raise DisconnectionError(
                "Attempting to disassociate database connection"
            )

    return engine


def process_safe_engine(
    database_name,
    dialect,
    username=None,
    password=None,
    database_host=None,
    database_port=None,
    **engine_overrides,
):
    """
    Create an SQLAlchemy engine whose pooled connections refuse to cross
    process boundaries.
    """
    url = sa.URL.create(
        dialect,
        username=username,
        password=password,
        host=database_host,
        port=database_port,
        database=database_name,
    )
    engine = create_engine(url, **engine_overrides)
    return __register_process_guards__(engine)
