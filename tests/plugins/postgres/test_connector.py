import unittest
from unittest.mock import MagicMock, patch

import psycopg2

from pgdoctor.plugins.common.errors import DatabaseConnectionError, QueryExecutionError
from pgdoctor.plugins.postgres.connector import PostgresConnector


class TestPostgresConnector(unittest.TestCase):
    def setUp(self):
        patcher = patch('pgdoctor.plugins.postgres.connector.psycopg2.connect')
        self.mock_connect = patcher.start()
        self.addCleanup(patcher.stop)

        self.conn = MagicMock()
        self.conn.closed = 0
        self.cursor = MagicMock()
        self.cursor.closed = False
        self.conn.cursor.return_value = self.cursor
        self.mock_connect.return_value = self.conn

    def test_connect_with_dsn(self):
        connector = PostgresConnector({'dsn': "postgresql://localhost/db", 'statement_timeout': 5000})
        connector.connect()
        kwargs = self.mock_connect.call_args.kwargs
        self.assertEqual(kwargs['dsn'], "postgresql://localhost/db")
        self.assertEqual(kwargs['options'], "-c statement_timeout=5000")
        self.assertTrue(self.conn.autocommit)

    def test_connect_with_settings(self):
        connector = PostgresConnector({
            'host': 'db', 'port': 5433, 'database': 'app', 'user': 'u',
            'password': 'p', 'sslmode': 'require',
        })
        connector.connect()
        kwargs = self.mock_connect.call_args.kwargs
        self.assertEqual(kwargs['host'], 'db')
        self.assertEqual(kwargs['dbname'], 'app')
        self.assertEqual(kwargs['sslmode'], 'require')

    def test_connect_failure_is_wrapped(self):
        self.mock_connect.side_effect = psycopg2.OperationalError("password authentication failed")
        connector = PostgresConnector({'dsn': "postgresql://localhost/db"})
        with self.assertRaises(DatabaseConnectionError):
            connector.connect()

    def test_execute_query_returns_rows(self):
        self.cursor.description = [("version",)]
        self.cursor.fetchall.return_value = [("PostgreSQL 16.1",)]
        connector = PostgresConnector({'dsn': "postgresql://localhost/db"})
        connector.connect()
        self.assertEqual(connector.execute_query("SELECT version();"), [("PostgreSQL 16.1",)])

    def test_execute_query_failure_is_wrapped(self):
        self.cursor.execute.side_effect = psycopg2.errors.UndefinedTable("relation does not exist")
        connector = PostgresConnector({'dsn': "postgresql://localhost/db"})
        connector.connect()
        with self.assertRaises(QueryExecutionError) as ctx:
            connector.execute_query("SELECT * FROM missing")
        self.assertEqual(ctx.exception.query, "SELECT * FROM missing")

    def test_execute_query_requires_connection(self):
        with self.assertRaises(QueryExecutionError):
            PostgresConnector({}).execute_query("SELECT 1")

    def test_disconnect(self):
        connector = PostgresConnector({'dsn': "postgresql://localhost/db"})
        connector.connect()
        connector.disconnect()
        self.conn.close.assert_called_once()
        self.assertIsNone(connector.conn)


if __name__ == '__main__':
    unittest.main()
