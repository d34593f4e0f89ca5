"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TIMEZONE = "UTC"
DEFAULT_LOG_LEVEL = "INFO"

MAX_DESCRIPTION_LENGTH = 500
MAX_NOTES_LENGTH = 2000
MAX_CONSUMED_AMOUNT_LENGTH = 50

# mysql-connector error numbers we react to.
MYSQL_DUPLICATE_ENTRY = 1062
