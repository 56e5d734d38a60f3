from cryptography.fernet import Fernet
import os


def get_sql_password():
    """
    Reads an encryption key from a text file and uses it to decrypt the SQL password.

    Args:
        None

    Returns:
        str: The decrypted MySQL password.

    Raises:
        ValueError: If SQL_PASSWORD_KEY_PATH or SQL_PASSWORD_PATH is not set.
        FileNotFoundError: If the key or encrypted password file is missing.
        Exception: If decryption fails.
    """
    key_path = os.getenv('SQL_PASSWORD_KEY_PATH')
    password_path = os.getenv('SQL_PASSWORD_PATH')
    if not key_path or not password_path:
        raise ValueError("SQL_PASSWORD_KEY_PATH and SQL_PASSWORD_PATH must both be set")

    with open(key_path, "r") as f:
        key = f.read().strip().encode()  # Read and encode the key
    fernet = Fernet(key)
    with open(password_path, "rb") as f:
        encrypted = f.read()

    return fernet.decrypt(encrypted).decode()

def save_sql_password(password: str, key_path: str, password_path: str, create_dir=True):
    """
    Encrypts a password with a freshly generated key and writes both files.

    Args:
        password (str): The plaintext MySQL password
        key_path (str): Where to write the Fernet key
        password_path (str): Where to write the encrypted password
        create_dir (bool): Whether to create missing directories (default: True)

    Returns:
        tuple: (key_path, password_path)
    """
    if create_dir:
        for path in (key_path, password_path):
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)

    key = Fernet.generate_key()
    with open(key_path, "w") as f:
        f.write(key.decode())
    with open(password_path, "wb") as f:
        f.write(Fernet(key).encrypt(password.encode()))

    return key_path, password_path

def error_message(exc: Exception) -> str:
    """Message text of a driver error, without the SQLSTATE prefix pyodbc carries."""
    # pyodbc errors are raised as (sqlstate, message)
    if len(exc.args) >= 2 and isinstance(exc.args[1], str):
        return exc.args[1]
    return str(exc)
