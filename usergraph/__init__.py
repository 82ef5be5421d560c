from .api import OperationError, UserGraphAPI
from .context import Context, ResolveInfo
from .errors import format_errors, SchemaValidationError
from .resolvers import Resolver
from .schema import USER_SCHEMA, build_schema, gql, load_schema
from .store import SEED_USERS, User, UserStore

__all__ = [
    "UserGraphAPI",
    "Context",
    "OperationError",
    "ResolveInfo",
    "Resolver",
    "SchemaValidationError",
    "SEED_USERS",
    "USER_SCHEMA",
    "User",
    "UserStore",
    "format_errors",
    "build_schema",
    "gql",
    "load_schema",
]

__VERSION__ = "0.1.0"
