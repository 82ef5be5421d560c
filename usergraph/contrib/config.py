"""
Config
======

Settings for the user graph, read from a dotenv file and the process
environment, the environment wins::

    settings = load_settings(".env")
    if settings.strict_ids:
        ...

Variables and their defaults:

======================== ==========================
``API_KEY``              ``your-api-key-here``
``DB_PASSWORD``          ``your-db-password-here``
``JWT_SECRET``           ``your-jwt-secret-here``
``USERGRAPH_DEBUG``      ``false``
``USERGRAPH_SEED``       ``true``
``USERGRAPH_STRICT_IDS`` ``false``
======================== ==========================

The secrets fall back to placeholders, never commit real values. They are
left out of the settings repr so they do not end up in logs.
"""

import dataclasses
import os
import typing

from dotenv import dotenv_values

TRUTHY = {"1", "on", "y", "yes", "true"}


def env(name: str, default: typing.Any, secret: bool = False) -> typing.Any:
    """Declare a setting read from the variable `name`."""
    return dataclasses.field(default=default, repr=not secret, metadata={"env": name})


@dataclasses.dataclass(frozen=True)
class Settings:
    api_key: str = env("API_KEY", "your-api-key-here", secret=True)
    db_password: str = env("DB_PASSWORD", "your-db-password-here", secret=True)
    jwt_secret: str = env("JWT_SECRET", "your-jwt-secret-here", secret=True)
    debug: bool = env("USERGRAPH_DEBUG", False)
    seed: bool = env("USERGRAPH_SEED", True)
    strict_ids: bool = env("USERGRAPH_STRICT_IDS", False)

    @classmethod
    def from_env(
        cls,
        env_file: str = ".env",
        environ: typing.Optional[typing.Mapping[str, str]] = None,
    ) -> "Settings":
        values: typing.Dict[str, typing.Optional[str]] = {
            **dotenv_values(env_file),
            **(os.environ if environ is None else environ),
        }
        found: typing.Dict[str, typing.Any] = {}
        for field in dataclasses.fields(cls):
            raw = values.get(field.metadata["env"])
            if raw is None:
                continue
            found[field.name] = raw.strip().lower() in TRUTHY if field.type is bool else raw
        return cls(**found)


def load_settings(env_file: str = ".env") -> Settings:
    return Settings.from_env(env_file)
