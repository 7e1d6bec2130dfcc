import configparser
import pathlib

import sqlalchemy as sa


def mk_db_config(path: pathlib.Path, **data) -> pathlib.Path:
    config = configparser.ConfigParser()
    config["Credentials"] = data
    config_path = path / "db.conf"
    with open(config_path, "wt") as fout:
        config.write(fout)
    return config_path


def join_rows(db, table, *columns):
    """
    Return the rows of a join table, ordered by the requested columns.
    """
    names = ", ".join(columns)
    q = sa.text(f"SELECT {names} FROM {table} ORDER BY {names}")
    return [tuple(row) for row in db.execute(q).all()]
