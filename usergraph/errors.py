"""
Errors
======

Validation and variable errors are produced by graphql-core before any
resolver runs. `format_errors` turns them into response dicts, giving the
argument errors a short message that names the user field at fault::

    Variable '$username' of required type 'String!' was not provided.

becomes ``{"message": "username is required", "extensions": {...}}``.
Parsed documents and their errors are cached by the API, so these
helpers never modify the errors they are given.
"""

import logging
import re
import typing

from graphql import GraphQLError, GraphQLFormattedError

DEFAULT_LOGGER = logging.getLogger(__name__)

VARIABLE_NAME = re.compile(r"Variable ['\"]\$(\w+)['\"]")
INPUT_PATH = re.compile(r" at ['\"]([^'\"]+)['\"]")

# Checked in order, first match wins.
FRIENDLY_MESSAGES: typing.List[typing.Tuple[str, str]] = [
    ("was not provided", "{field} is required"),
    ("must not be null", "{field} is required"),
    ("String cannot represent", "Please enter valid text for {field}"),
    ("ID cannot represent", "Please enter a valid id for {field}"),
]


class SchemaValidationError(Exception):
    """Raised when the schema is invalid or a resolver targets an unknown field."""

    pass


def format_errors(
    errors: typing.Optional[typing.List[GraphQLError]] = None,
    logger: typing.Optional[logging.Logger] = None,
    level: int = logging.DEBUG,
) -> typing.Optional[typing.List[GraphQLFormattedError]]:
    """Return the errors as response dicts, logging the ones not recognised."""
    if not errors:
        return None

    logger = logger or DEFAULT_LOGGER
    formatted_errors: typing.List[GraphQLFormattedError] = []

    for err in errors:
        friendly = friendly_error(err)
        if friendly is err:
            log_error(err, logger, level)
        formatted_errors.append(friendly.formatted)

    return formatted_errors


def log_error(error: GraphQLError, logger: logging.Logger, level: int):
    tb = error.__traceback__
    if tb is None:
        logger.log(level, f"{error}")
        return

    while tb.tb_next:
        tb = tb.tb_next
    logger.log(level, f"{error} \nContext={tb.tb_frame.f_locals!r}")


def friendly_error(error: GraphQLError) -> GraphQLError:
    """Return a copy of an argument error with a message naming the field.

    Errors that are not about a user argument are returned unchanged.
    """
    field = argument_name(error.message)
    if field is None:
        return error

    message = f"Invalid input for field: {field}"
    for marker, template in FRIENDLY_MESSAGES:
        if marker in error.message:
            message = template.format(field=field)
            break

    return GraphQLError(
        message,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        original_error=error.original_error,
        extensions={"field": field, "original_error": error.message},
    )


def argument_name(message: str) -> typing.Optional[str]:
    """Find the argument an error message is about, `'$email'` gives `email`."""
    if path_match := INPUT_PATH.search(message):
        return path_match.group(1).split(".")[-1]

    if variable_match := VARIABLE_NAME.match(message):
        return variable_match.group(1)

    return None
