"""
Tests for the Alembic revisions
"""

import importlib.util
from pathlib import Path

import pytest
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

from eink_hub import db_models

VERSIONS_DIR = Path(__file__).resolve().parent.parent / "alembic" / "versions"


def _load_revision(name: str):
    spec = importlib.util.spec_from_file_location(name, VERSIONS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _run(engine, step):
    with engine.begin() as conn:
        context = MigrationContext.configure(conn)
        with Operations.context(context):
            step()


def test_create_devices_matches_orm_model():
    """The migration builds the same columns the ORM model maps."""
    revision = _load_revision("001_create_devices")
    engine = create_engine("sqlite://")

    _run(engine, revision.upgrade)

    columns = {c["name"] for c in inspect(engine).get_columns("devices")}
    assert columns == {c.name for c in db_models.Device.__table__.columns}


def test_create_devices_mac_unique_but_nullable():
    revision = _load_revision("001_create_devices")
    engine = create_engine("sqlite://")
    _run(engine, revision.upgrade)

    insert = text("INSERT INTO devices (id, mac, api_key) VALUES (:id, :mac, :api_key)")
    with engine.begin() as conn:
        conn.execute(insert, {"id": "AAAAAA", "mac": None, "api_key": "k1"})
        conn.execute(insert, {"id": "BBBBBB", "mac": None, "api_key": "k2"})
        conn.execute(insert, {"id": "CCCCCC", "mac": "AA:BB", "api_key": "k3"})
        images = conn.execute(text("SELECT images FROM devices WHERE id = 'AAAAAA'")).scalar()

    assert images == "[]"

    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.execute(insert, {"id": "DDDDDD", "mac": "AA:BB", "api_key": "k4"})


def test_create_devices_downgrade():
    revision = _load_revision("001_create_devices")
    engine = create_engine("sqlite://")

    _run(engine, revision.upgrade)
    _run(engine, revision.downgrade)

    assert "devices" not in inspect(engine).get_table_names()
