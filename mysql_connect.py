"""
MySQL connection check
Connects to the configured MySQL database, runs one query, logs the rows and closes the connection.
Connection settings come from the .env file or environment variables (see config_manager.py)

Usage:
  mysql-connect
  mysql-connect --encrypt-password --key-path secrets/sql.key --password-path secrets/sql.pwd
"""

import argparse
import getpass
import logging
import os
import sys

from database_utils import run_session
from functions import save_sql_password

def console_handlers(stdout=None, stderr=None):
    """Informational records go to stdout, warnings and errors to stderr."""
    out_handler = logging.StreamHandler(stdout or sys.stdout)
    out_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    err_handler = logging.StreamHandler(stderr or sys.stderr)
    err_handler.setLevel(logging.WARNING)
    return [out_handler, err_handler]

# Configure logging
logging.basicConfig(level=logging.INFO, handlers=console_handlers())
logger = logging.getLogger(__name__)

def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Connect to MySQL, run the configured query and log the rows."
    )
    p.add_argument(
        "--encrypt-password",
        action="store_true",
        help="Prompt for the MySQL password and write the key and encrypted password files instead of connecting",
    )
    p.add_argument(
        "--key-path",
        default=os.getenv("SQL_PASSWORD_KEY_PATH"),
        help="Key file to write (default: $SQL_PASSWORD_KEY_PATH)",
    )
    p.add_argument(
        "--password-path",
        default=os.getenv("SQL_PASSWORD_PATH"),
        help="Encrypted password file to write (default: $SQL_PASSWORD_PATH)",
    )
    return p.parse_args(argv)

def encrypt_password(key_path, password_path) -> bool:
    """Prompt for the password and store it encrypted for config_manager to load"""
    if not key_path or not password_path:
        logger.error("Both --key-path and --password-path (or SQL_PASSWORD_KEY_PATH and SQL_PASSWORD_PATH) are required")
        return False

    password = getpass.getpass("MySQL password: ")
    if not password:
        logger.error("Empty password, nothing written")
        return False

    save_sql_password(password, key_path, password_path)
    logger.info(f"Wrote key to {key_path} and encrypted password to {password_path}")
    return True

def main(argv=None):
    """Run the connect, query, close sequence once"""
    args = _parse_args(argv)
    if args.encrypt_password:
        encrypt_password(args.key_path, args.password_path)
        return
    run_session()

if __name__ == "__main__":
    main()
