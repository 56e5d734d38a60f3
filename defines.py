# Connection defaults - override through the .env file or environment
DEFAULT_HOST = 'localhost'
DEFAULT_PORT = 3306
DEFAULT_DRIVER = 'MySQL ODBC 8.0 Unicode Driver'

# The one query this script runs
DEFAULT_QUERY = 'SELECT * FROM your_table_name'

# Console labels
CONNECTED_MESSAGE = 'Connected to MySQL'
QUERY_RESULTS_LABEL = 'Query results:'
CONNECT_ERROR_LABEL = 'Error connecting to MySQL:'
QUERY_ERROR_LABEL = 'Error executing query:'
