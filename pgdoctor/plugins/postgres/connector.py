import logging

import psycopg2

from pgdoctor.plugins.common.errors import DatabaseConnectionError, QueryExecutionError

logger = logging.getLogger(__name__)


class PostgresConnector:
    """
    PostgreSQL connector shared by all checks of a run.

    One connection is opened in autocommit mode and reused for every query.
    Failed queries are rolled back and raised as QueryExecutionError so the
    runner can isolate the failing check and keep going.
    """

    def __init__(self, settings):
        self.settings = settings
        self.conn = None
        self.cursor = None

    def _connect_kwargs(self):
        """Builds psycopg2.connect() keyword arguments from settings."""
        timeout = self.settings.get('statement_timeout', 30000)
        kwargs = {}

        if self.settings.get('dsn'):
            kwargs['dsn'] = self.settings['dsn']
        else:
            kwargs.update(
                host=self.settings['host'],
                port=self.settings['port'],
                dbname=self.settings['database'],
                user=self.settings['user'],
                password=self.settings.get('password'),
            )

        if self.settings.get('sslmode'):
            kwargs['sslmode'] = self.settings['sslmode']
        if self.settings.get('connect_timeout'):
            kwargs['connect_timeout'] = self.settings['connect_timeout']
        if timeout:
            kwargs['options'] = f"-c statement_timeout={int(timeout)}"

        return kwargs

    def connect(self):
        """
        Opens the session.

        Raises:
            DatabaseConnectionError: If the server cannot be reached or
                rejects the credentials.
        """
        try:
            self.conn = psycopg2.connect(**self._connect_kwargs())
            self.conn.autocommit = True
            self.cursor = self.conn.cursor()
        except psycopg2.Error as e:
            logger.error(f"Error connecting to PostgreSQL: {e}")
            raise DatabaseConnectionError(f"Failed to connect to PostgreSQL: {e}") from e

        logger.info(f"Connected to PostgreSQL (server version {self.conn.server_version})")

    def disconnect(self):
        """Closes the cursor and connection if they are open."""
        if self.cursor is not None and not self.cursor.closed:
            self.cursor.close()
        if self.conn is not None and not self.conn.closed:
            self.conn.close()
            logger.info("Disconnected from PostgreSQL")
        self.cursor = None
        self.conn = None

    def execute_query(self, query, params=None):
        """
        Executes a query and returns all rows as tuples.

        Returns:
            list: Rows in server order; empty for statements without a result set.

        Raises:
            QueryExecutionError: If the connection is not open or the query fails.
        """
        if self.conn is None or self.conn.closed:
            raise QueryExecutionError("Connection is not open", query=query)

        if self.cursor is None or self.cursor.closed:
            self.cursor = self.conn.cursor()

        try:
            self.cursor.execute(query, params)
            if self.cursor.description is None:
                return []
            return self.cursor.fetchall()
        except psycopg2.Error as e:
            logger.error(f"Query failed: {e}")
            if not self.conn.autocommit:
                self.conn.rollback()
            raise QueryExecutionError(f"Query failed: {e}", query=query) from e
