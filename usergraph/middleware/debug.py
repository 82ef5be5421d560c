"""
Debug Middleware
================

Logs every user operation with its arguments, what it found or changed and
how long it took::

    import usergraph
    from usergraph.middleware import DebugMiddleware

    api = usergraph.UserGraphAPI(middleware=[DebugMiddleware()])
    api.create_user("carol")

    # DEBUG usergraph.middleware.debug: Running mutation createUser(username='carol', email=None)
    # DEBUG usergraph.middleware.debug: Finished mutation createUser: user 3 (carol) in 0.000012 seconds

Fields of the `User` type pass straight through. The command line turns
this on with ``--debug`` or ``USERGRAPH_DEBUG=true``.
"""

import inspect
import logging
import time
import typing

from graphql import GraphQLResolveInfo

from usergraph.store import User

OPERATION_TYPES = {"Query": "query", "Mutation": "mutation"}


def describe_arguments(arguments: typing.Dict[str, typing.Any]) -> str:
    if not arguments:
        return ""
    pairs = ", ".join(f"{name}={value!r}" for name, value in arguments.items())
    return f"({pairs})"


def describe_result(result: typing.Any) -> str:
    if isinstance(result, User):
        return f"user {result.id} ({result.username})"
    if isinstance(result, list):
        return f"{len(result)} users"
    if result is None:
        return "no user"
    return repr(result)


class DebugMiddleware:
    def __init__(self, logger: typing.Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def resolve(
        self,
        next_fn: typing.Callable[..., typing.Any],
        parent_object: typing.Any,
        info: GraphQLResolveInfo,
        **kwargs,
    ):
        kind = OPERATION_TYPES.get(info.parent_type.name)
        if kind is None:
            return next_fn(parent_object, info, **kwargs)

        operation = f"{kind} {info.field_name}"
        self.logger.debug(f"Running {operation}{describe_arguments(kwargs)}")
        start_time = time.perf_counter()

        results = next_fn(parent_object, info, **kwargs)

        if inspect.isawaitable(results):
            return self._finish_later(operation, results, start_time)

        self._finish(operation, results, start_time)
        return results

    async def _finish_later(
        self, operation: str, results: typing.Awaitable[typing.Any], start_time: float
    ) -> typing.Any:
        value = await results
        self._finish(operation, value, start_time)
        return value

    def _finish(self, operation: str, results: typing.Any, start_time: float):
        total_time = time.perf_counter() - start_time
        self.logger.debug(
            f"Finished {operation}: {describe_result(results)} in {total_time:.6f} seconds"
        )
