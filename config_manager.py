"""
Configuration Manager for the MySQL connection check
Handles environment variables and database credentials
"""

import os
import logging
from dotenv import load_dotenv

from defines import DEFAULT_DRIVER, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_QUERY
from functions import get_sql_password

# Configure logging
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()

# Characters that end or open a value in an ODBC connection string
ODBC_SPECIAL_CHARS = set(";{}")

def _escape_braces(value) -> str:
    return str(value).replace("}", "}}")

def _odbc_value(value) -> str:
    """
    Quote a connection string value when it carries ODBC delimiters.
    Braced values may contain ; and {, a closing brace is doubled.
    """
    value = str(value)
    if ODBC_SPECIAL_CHARS & set(value) or value != value.strip():
        return "{" + _escape_braces(value) + "}"
    return value

class DatabaseConfig:
    """Database configuration handler"""

    def __init__(self):
        """Initialize database configuration from environment variables and the password source"""
        self.host = os.getenv('DB_HOST', DEFAULT_HOST)
        self.port = os.getenv('DB_PORT', str(DEFAULT_PORT))
        self.database = os.getenv('DB_DATABASE')
        self.username = os.getenv('DB_USERNAME')
        self.driver = os.getenv('DB_DRIVER', DEFAULT_DRIVER)
        self.query = os.getenv('DB_QUERY', DEFAULT_QUERY)
        self.password = self._load_password()

    @staticmethod
    def _load_password():
        """Plain DB_PASSWORD wins; otherwise decrypt the password file."""
        password = os.getenv('DB_PASSWORD')
        if password:
            return password
        try:
            return get_sql_password()
        except Exception as e:
            logger.error(f"Failed to decrypt SQL password: {e}")
            return None

    def validate(self) -> bool:
        """
        Validate that all required database configuration is present.

        Returns:
            True if all required fields are present, False otherwise
        """
        required_fields = {
            'host': self.host,
            'database': self.database,
            'username': self.username,
            'password': self.password
        }

        missing_fields = [field for field, value in required_fields.items() if not value]

        if missing_fields:
            if 'password' in missing_fields:
                logger.error(f"Missing database configuration: {', '.join(missing_fields)}")
                logger.error("Password error - set DB_PASSWORD or check SQL_PASSWORD_PATH and SQL_PASSWORD_KEY_PATH files")
                logger.error("For other fields, check your .env file or environment variables")
            else:
                logger.error(f"Missing database configuration: {', '.join(missing_fields)}")
                logger.error("Please check your .env file or environment variables")
            return False

        if not str(self.port).isdigit():
            logger.error(f"Invalid DB_PORT: {self.port}")
            return False

        return True

    def get_connection_string(self) -> str:
        """
        Build and return ODBC connection string for MySQL.

        Returns:
            Formatted connection string

        Raises:
            ValueError: If configuration is invalid
        """
        if not self.validate():
            raise ValueError("Invalid database configuration")

        connection_string = (
            f"DRIVER={{{_escape_braces(self.driver)}}};"
            f"SERVER={_odbc_value(self.host)};"
            f"PORT={self.port};"
            f"DATABASE={_odbc_value(self.database)};"
            f"UID={_odbc_value(self.username)};"
            f"PWD={_odbc_value(self.password)};"
        )

        return connection_string

# Create global instance
db_config = DatabaseConfig()
