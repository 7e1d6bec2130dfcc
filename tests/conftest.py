import pathlib
from tempfile import TemporaryDirectory

import pytest
import sqlalchemy as sa
from sqlalchemy.orm import sessionmaker

from jointable.core.base_model import JoinTableModel

from .models import Developer, Project, Tag


@pytest.fixture
def engine():
    """An in-memory database shared by every connection of the test."""
    engine = sa.create_engine(
        "sqlite://",
        poolclass=sa.pool.StaticPool,
        connect_args={"check_same_thread": False},
    )
    JoinTableModel.metadata.create_all(bind=engine)
    yield engine
    JoinTableModel.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def developer(db):
    developer = Developer(name="Ada")
    db.add(developer)
    db.flush()
    return developer


@pytest.fixture
def projects(db):
    projects = [
        Project(name="Analytical Engine", access_level="admin"),
        Project(name="Difference Engine", access_level="read"),
        Project(name="Notes", access_level=None),
    ]
    db.add_all(projects)
    db.flush()
    return projects


@pytest.fixture
def tag(db):
    tag = Tag(label="math")
    db.add(tag)
    db.flush()
    return tag


@pytest.fixture
def tempdir():
    with TemporaryDirectory() as _tmpdir:
        yield pathlib.Path(_tmpdir)
