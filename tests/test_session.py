"""Unit tests for engine construction."""

from __future__ import annotations

import unittest

from sqlalchemy.engine import URL
from sqlalchemy.pool import QueuePool, StaticPool

from identity_bot.db.session import build_connect_args, create_db_engine


class ConnectArgsTestCase(unittest.TestCase):
    def test_postgres_gets_connect_and_statement_timeouts(self) -> None:
        url = URL.create("postgresql+psycopg", username="bot", host="db", database="identity")
        connect_args = build_connect_args(url, connect_timeout=10, statement_timeout=2.5)
        self.assertEqual(connect_args, {"connect_timeout": 10, "options": "-c statement_timeout=2500"})

    def test_postgres_timeouts_can_be_disabled(self) -> None:
        connect_args = build_connect_args("postgresql+psycopg://bot@db/identity", connect_timeout=0)
        self.assertEqual(connect_args, {})

    def test_sqlite_ignores_timeouts(self) -> None:
        connect_args = build_connect_args("sqlite:///bot.db", connect_timeout=10, statement_timeout=30)
        self.assertEqual(connect_args, {"check_same_thread": False})


class CreateEngineTestCase(unittest.TestCase):
    def test_file_database_uses_bounded_pool(self) -> None:
        engine = create_db_engine("sqlite:///bot.db", pool_size=3, pool_timeout=1.5)
        try:
            self.assertIsInstance(engine.pool, QueuePool)
            self.assertEqual(engine.pool.size(), 3)
            self.assertEqual(engine.pool._max_overflow, 0)
            self.assertEqual(engine.pool.timeout(), 1.5)
        finally:
            engine.dispose()

    def test_memory_database_shares_one_connection(self) -> None:
        engine = create_db_engine("sqlite://", pool_size=3, pool_timeout=1.5)
        try:
            self.assertIsInstance(engine.pool, StaticPool)
        finally:
            engine.dispose()


if __name__ == "__main__":
    unittest.main()
