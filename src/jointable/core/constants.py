"""
This module defines constants across all submodules.
"""
import pathlib

DEFAULT_CONFIG_PATH = pathlib.Path(
    "~", ".config", "jointable", "db.conf"
).expanduser()
CREDENTIALS_SECTION = "Credentials"
DEFAULT_DIALECT = "postgresql+psycopg"

TIMESTAMP_ATTRIBUTES = ("created_at", "created_on", "updated_at", "updated_on")
DEFAULT_TIMEZONE = "utc"
