"""
Application-wide constants.

Centralizes field names, column mappings and validation limits.
"""

# =============================================================================
# User Fields
# =============================================================================

# Fields a partial user update may change; anything else is dropped
USER_UPDATABLE_FIELDS = frozenset({"first_name", "last_name", "password", "is_admin"})

# Logical field name -> users table column
USER_COLUMN_ALIASES = {
    "first_name": "first_name",
    "last_name": "last_name",
    "password": "password_digest",
    "is_admin": "is_admin",
}

USERNAME_MAX_LENGTH = 30
NAME_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 5

# =============================================================================
# Collection Fields
# =============================================================================

TITLE_MAX_LENGTH = 100

# Exactly six hexadecimal characters, case preserved as given
COLOR_HEX_PATTERN = r"^[0-9a-fA-F]{6}$"
COLOR_HEX_LENGTH = 6

# =============================================================================
# Security
# =============================================================================

# bcrypt refuses fewer rounds than this
BCRYPT_MIN_ROUNDS = 4
