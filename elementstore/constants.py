"""Storage naming constants shared by both backends."""

# Prefix applied to every table and collection owned by this application
DB_TABLE_PREFIX = "app_"

ELEMENTS_TABLE = f"{DB_TABLE_PREFIX}elements"
SUB_ELEMENTS_TABLE = f"{DB_TABLE_PREFIX}sub_elements"

ELEMENTS_COLLECTION = f"{DB_TABLE_PREFIX}elements"

# Column lengths
MAX_NAME_LENGTH = 256
MAX_SUB_ELEMENT_NAME_LENGTH = 256
MAX_SUB_ELEMENT_VALUE_LENGTH = 1024

# Advisory lock serialising concurrent schema upgrades on PostgreSQL
MIGRATION_LOCK_ID = 0x656C656D
