import logging
from contextlib import contextmanager
from typing import Generator

from fastapi import Request
from neo4j import GraphDatabase, Query, Session
from neo4j.exceptions import ClientError

from config import Settings

logger = logging.getLogger(__name__)


# Constraints and lookup indexes backing the id lookups and filters
SCHEMA_STATEMENTS = [
    "CREATE CONSTRAINT truck_id_unique IF NOT EXISTS "
    "FOR (t:Truck) REQUIRE t.id IS UNIQUE",
    "CREATE CONSTRAINT lease_contract_id_unique IF NOT EXISTS "
    "FOR (lc:LeaseContract) REQUIRE lc.id IS UNIQUE",
    "CREATE INDEX truck_number_index IF NOT EXISTS "
    "FOR (t:Truck) ON (t.truckNumber)",
    "CREATE INDEX lease_contract_status_index IF NOT EXISTS "
    "FOR (lc:LeaseContract) ON (lc.status)",
]

SCHEMA_NAMES = [
    "truck_id_unique",
    "lease_contract_id_unique",
    "truck_number_index",
    "lease_contract_status_index",
]


class InvalidKeywordError(ValueError):
    """Raised when a search keyword is not a valid regular expression."""


class Neo4jConnection:
    """Manages Neo4j database connections with connection pooling."""

    def __init__(self, settings: Settings):
        """Initialize Neo4j connection from application settings."""
        self.uri = settings.neo4j_uri
        self.user = settings.neo4j_user
        self.password = settings.neo4j_password
        self.database = settings.neo4j_database
        self.query_timeout = settings.neo4j_query_timeout
        self.schema_ready = False

        if not self.password:
            raise ValueError("NEO4J_PASSWORD is required in settings")

        self.driver = GraphDatabase.driver(
            self.uri,
            auth=(self.user, self.password),
            max_connection_pool_size=settings.neo4j_max_pool_size,
            connection_acquisition_timeout=settings.neo4j_connection_timeout,
        )

    def close(self):
        """Close the driver connection"""
        if self.driver:
            self.driver.close()

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session with automatic cleanup"""
        session = self.driver.session(database=self.database)
        try:
            yield session
        finally:
            session.close()

    def verify_connectivity(self) -> bool:
        """Verify database connectivity.

        Returns:
            bool: True if connected, False otherwise
        """
        try:
            with self.get_session() as session:
                result = session.run("RETURN 1 as test")
                return result.single()["test"] == 1
        except Exception as e:
            logger.error(f"Database connectivity check failed: {e}")
            return False

    def ensure_schema(self):
        """Create the uniqueness constraints and lookup indexes if missing."""
        with self.get_session() as session:
            for statement in SCHEMA_STATEMENTS:
                session.run(statement).consume()
        self.schema_ready = True
        logger.info(f"Ensured {len(SCHEMA_STATEMENTS)} constraints and indexes")


def get_db(request: Request) -> Neo4jConnection:
    """FastAPI dependency: the connection opened by the application lifespan."""
    return request.app.state.db


def keyword_pattern(keyword: str) -> str:
    """Build a case-insensitive, unanchored Cypher regex for a search keyword.

    Cypher's =~ operator matches the whole string, so the keyword is grouped
    and wrapped in .* on both sides to behave like a substring search, even
    when it contains alternations. The pattern is evaluated by Neo4j as a
    Java regex; an invalid one surfaces from search_query.
    """
    return f"(?is).*(?:{keyword}).*"


class BaseRepository:
    """Base repository with common Neo4j operations.

    Provides common database operations that all specific repositories inherit.
    Handles query execution, transactions, and the per-query timeout.
    """

    def __init__(self, db: Neo4jConnection):
        self.db = db

    def execute_query(self, query: str, parameters: dict = None) -> list:
        """Execute a read query and return results.

        Args:
            query: Cypher query string
            parameters: Optional query parameters

        Returns:
            list: Query results as list of dictionaries
        """
        with self.db.get_session() as session:
            result = session.run(
                Query(query, timeout=self.db.query_timeout),
                parameters or {}
            )
            return [record.data() for record in result]

    def execute_write(self, query: str, parameters: dict = None) -> list:
        """Execute a write query in an explicit transaction.

        The transaction is not retried on failure.

        Args:
            query: Cypher query string
            parameters: Optional query parameters

        Returns:
            list: Records returned by the query as list of dictionaries
        """
        with self.db.get_session() as session:
            with session.begin_transaction(timeout=self.db.query_timeout) as tx:
                result = tx.run(query, parameters or {})
                records = [record.data() for record in result]
                tx.commit()
                return records

    def search_query(self, query: str, keyword: str, parameters: dict = None) -> list:
        """Execute a read query filtered by a keyword regex.

        Neo4j rejects a malformed pattern with a Neo.ClientError.Statement.*
        error, which is raised as InvalidKeywordError.
        """
        params = dict(parameters or {}, pattern=keyword_pattern(keyword))
        try:
            return self.execute_query(query, params)
        except ClientError as e:
            if not (e.code or "").startswith("Neo.ClientError.Statement."):
                raise
            raise InvalidKeywordError(f"Invalid search keyword '{keyword}': {e.message}") from e
