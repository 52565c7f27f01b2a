"""Engine options per database URL"""

import pytest
from sqlalchemy.pool import StaticPool

from wishlist_api.database import _engine_options, engine, is_memory_sqlite


@pytest.mark.parametrize("url", ["sqlite://", "sqlite:///:memory:", "sqlite:///file:db?mode=memory&uri=true"])
def test_memory_urls_share_one_connection(url):
    assert is_memory_sqlite(url)
    assert _engine_options(url)["poolclass"] is StaticPool


@pytest.mark.parametrize("url", ["sqlite:///./wishlist.db", "sqlite:////var/data/wishlist.db"])
def test_file_urls_get_a_connection_per_session(url):
    options = _engine_options(url)

    assert not is_memory_sqlite(url)
    assert "poolclass" not in options
    assert options["connect_args"]["check_same_thread"] is False
    assert options["connect_args"]["timeout"] > 0


def test_server_databases_use_pool_settings():
    options = _engine_options("postgresql://app:secret@db/wishlist")

    assert not is_memory_sqlite("postgresql://app:secret@db/wishlist")
    assert options["pool_pre_ping"] is True
    assert "connect_args" not in options


def test_sessions_do_not_share_a_connection():
    with engine.connect() as first, engine.connect() as second:
        assert first.connection.dbapi_connection is not second.connection.dbapi_connection
