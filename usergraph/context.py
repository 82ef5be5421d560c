"""
Resolvers reach the user store through ``info.context``. `UserGraphAPI`
builds one `Context` per call, holding the request that carried the
document, the settings the API was built with and the API's `UserStore`::

    def resolve_user(parent, info: ResolveInfo[Context], id: str):
        return info.context.store.find_by_id(id)

Extra values handed to ``call(..., context={...})`` become attributes of the
context, which is how hosted routes pass things like a tenant name along.
"""

import typing

from graphql import GraphQLResolveInfo
from starlette.datastructures import State
from starlette.requests import Request

from usergraph.store import UserStore

C = typing.TypeVar("C")
ConfigT = typing.TypeVar("ConfigT")


class ResolveInfo(GraphQLResolveInfo, typing.Generic[C]):
    """`GraphQLResolveInfo` with a typed ``context``, for annotations only."""

    context: C


def blank_request(state: typing.Any = None) -> Request:
    """Request used when a document is run in process, outside of HTTP."""
    return Request(scope={"type": "http", "headers": [], "state": state or {}})


class Context(typing.Generic[ConfigT]):
    """Per call state for the user resolvers.

    Subclass and override `setup` to derive more state, for example the
    current user from a request header.
    """

    request: Request
    config: ConfigT
    store: UserStore

    def __init__(
        self,
        *,
        request: typing.Optional[Request] = None,
        config: typing.Optional[ConfigT] = None,
        store: typing.Optional[UserStore] = None,
        **extra: typing.Any,
    ):
        self.request = request if request is not None else blank_request()
        self.config = config if config is not None else typing.cast(ConfigT, State())
        self.store = store if store is not None else UserStore()
        for name, value in extra.items():
            setattr(self, name, value)
        self.setup()

    def setup(self) -> None:
        """Called once the request, settings and store are in place."""
