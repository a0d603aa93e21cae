"""Required environment variables of the auth service.

Keep this catalog in sync with ``.env.example`` (``auth-scaffold schema
--format env`` regenerates it).
"""

from .schema import VariableSpec
from .types import Enumerated, FilePath, Text, UnsignedShort

# Variable suffix names, without the configured prefix
DB_NAME = "DB_NAME"
DB_HOST = "DB_HOST"
DB_PORT = "DB_PORT"
DB_USER = "DB_USER"
DB_PASS = "DB_PASS"
DB_SSL_MODE = "DB_SSL_MODE"
PATH_TO_DB_SSL_ROOT_CERT = "PATH_TO_DB_SSL_ROOT_CERT"

# Postgres sslmode values
DISABLE_SSL = "disable"
ALLOW_SSL = "allow"
PREFER_SSL = "prefer"
REQUIRE_SSL = "require"
VERIFY_CA_SSL = "verify-ca"
VERIFY_FULL_SSL = "verify-full"

SSL_MODES: tuple[str, ...] = (
    DISABLE_SSL,
    ALLOW_SSL,
    PREFER_SSL,
    REQUIRE_SSL,
    VERIFY_CA_SSL,
    VERIFY_FULL_SSL,
)

REQUIRED_VARIABLES: tuple[VariableSpec, ...] = (
    VariableSpec(DB_NAME, Text(), "Database name to open pool connection to"),
    VariableSpec(DB_HOST, Text(), "Database host address"),
    VariableSpec(DB_PORT, UnsignedShort(), "Database connection port"),
    VariableSpec(DB_USER, Text(), "Database user"),
    VariableSpec(DB_PASS, Text(), "Database password", secret=True),
    VariableSpec(DB_SSL_MODE, Enumerated(SSL_MODES), "Database SSL mode"),
    VariableSpec(
        PATH_TO_DB_SSL_ROOT_CERT, FilePath(), "Database SSL root certificate"
    ),
)
