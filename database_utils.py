"""
Database utilities for the MySQL connection check
Handles MySQL database connections and queries using pyodbc
"""

import pyodbc
import logging
from typing import List, Dict, Any, Optional
from config_manager import DatabaseConfig, db_config
from defines import (
    CONNECTED_MESSAGE,
    CONNECT_ERROR_LABEL,
    QUERY_ERROR_LABEL,
    QUERY_RESULTS_LABEL,
)
from functions import error_message

# Configure logging
logger = logging.getLogger(__name__)

class DatabaseConnection:
    """
    Database connection manager for MySQL.
    Handles connection lifecycle and provides query execution methods.
    """

    def __init__(self, config: Optional[DatabaseConfig] = None):
        """Initialize database connection manager"""
        self.config = config or db_config
        self.connection = None
        self.cursor = None

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    def connect(self) -> bool:
        """
        Establish connection to the database.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            connection_string = self.config.get_connection_string()
            self.connection = pyodbc.connect(connection_string)
            self.cursor = self.connection.cursor()
        except (pyodbc.Error, ValueError) as e:
            logger.error(f"{CONNECT_ERROR_LABEL} {error_message(e)}")
            # cursor() can fail after the connection opened
            self.disconnect()
            return False
        logger.info(CONNECTED_MESSAGE)
        return True

    def disconnect(self):
        """Close database connection and cursor"""
        try:
            if self.cursor:
                self.cursor.close()
            if self.connection:
                self.connection.close()
        except pyodbc.Error as e:
            logger.warning(f"Error closing MySQL connection: {error_message(e)}")
        finally:
            self.cursor = None
            self.connection = None
        logger.debug("Database connection closed")

    def execute_query(self, query: str) -> List[Dict[str, Any]]:
        """
        Execute a query exactly as given and return results as list of dictionaries.

        Args:
            query: SQL query string, sent unescaped

        Returns:
            List of dictionaries with column names as keys

        Raises:
            pyodbc.Error: If query execution fails
        """
        self.cursor.execute(query)

        # Statements without a result set have no description
        if self.cursor.description is None:
            return []

        # Get column names from cursor description
        columns = [column[0] for column in self.cursor.description]

        # Fetch all rows and convert to list of dictionaries
        results = []
        for row in self.cursor.fetchall():
            results.append(dict(zip(columns, row)))

        return results

    def __enter__(self):
        """Context manager entry"""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.disconnect()

def run_session(query: Optional[str] = None, config: Optional[DatabaseConfig] = None) -> Optional[List[Dict[str, Any]]]:
    """
    Connect, run one query, log the outcome and close the connection.
    The connection is closed only after the query has finished, on every path.

    Args:
        query: SQL text to run, defaults to the configured query
        config: Database configuration, defaults to the global one

    Returns:
        The result rows, or None if connecting or querying failed
    """
    config = config or db_config
    query = query or config.query

    with DatabaseConnection(config) as db:
        if not db.is_connected:
            return None
        try:
            results = db.execute_query(query)
        except pyodbc.Error as e:
            logger.error(f"{QUERY_ERROR_LABEL} {error_message(e)}")
            return None
        logger.info(f"{QUERY_RESULTS_LABEL} {results}")
        return results
