import asyncio

import pytest

from database import DatabaseManager
from settings import DatabaseConfig


def unconfigured():
    return DatabaseConfig(host='', port=5432, database='', user='', password='', connection_string='')


def test_config_detection():
    assert not unconfigured().is_configured
    assert DatabaseConfig(connection_string='postgres://x').is_configured
    assert DatabaseConfig(host='h', database='d', user='u', connection_string='').is_configured


def test_unconfigured_database_skips_connection():
    db = DatabaseManager(unconfigured())
    asyncio.run(db.connect())
    assert db.pool is None
    asyncio.run(db.init_schema())
    asyncio.run(db.disconnect())


def test_queries_need_a_connection():
    db = DatabaseManager(unconfigured())
    with pytest.raises(RuntimeError):
        asyncio.run(db.add_points(3))
