"""
Resolvers
=========

The four operations of the user graph. Each one is a thin wrapper around
the `UserStore` found on the request context, a missing record comes back
as ``None`` or ``False`` and never as an error.

=============  ========  ====================================  ============
Operation      Kind      Arguments                             Result
=============  ========  ====================================  ============
``user``       query     ``id: ID!``                           ``User``
``users``      query                                           ``[User]``
``createUser`` mutation  ``username: String!, email: String``  ``User``
``deleteUser`` mutation  ``id: ID!``                           ``Boolean``
=============  ========  ====================================  ============

Required arguments are enforced by schema validation before these run.
"""

import collections
import logging
import typing

from usergraph.context import Context, ResolveInfo
from usergraph.store import User

LOG = logging.getLogger(__name__)

ResolverFn = typing.TypeVar("ResolverFn", bound=typing.Callable[..., typing.Any])


class Resolver:
    """
    Collection of resolvers that can be included in an API. This lets you
    keep resolvers in their own module and register them all at once::

        books = Resolver()

        @books.query()
        def books(parent, info):
            return info.context.books.all()

        api = UserGraphAPI(schema=SCHEMA)
        api.include_resolver(books)
    """

    registry: typing.Dict[str, typing.Dict[str, typing.Callable[..., typing.Any]]]

    def __init__(self):
        self.registry = collections.defaultdict(dict)

    def query(
        self, field_name: typing.Optional[str] = None
    ) -> typing.Callable[[ResolverFn], ResolverFn]:
        """Query Resolver

        Short cut to add a resolver for a query, by default it will use the
        name of the function as the `field_name` to be resolved.

        :param field_name: Field name to resolve, by default the function name will be used.
        """
        return self.resolver("Query", field_name)

    def mutation(
        self, field_name: typing.Optional[str] = None
    ) -> typing.Callable[[ResolverFn], ResolverFn]:
        """Mutation Resolver

        :param field_name: Field name to resolve, by default the function name will be used.
        """
        return self.resolver("Mutation", field_name)

    def resolver(
        self, type_name: str, field_name: typing.Optional[str] = None
    ) -> typing.Callable[[ResolverFn], ResolverFn]:
        """Field Resolver

        :param type_name: Parent object type name that is being resolved.
        :param field_name: Field name to resolve, by default the function name will be used.
        """

        def decorator(function: ResolverFn) -> ResolverFn:
            _name = field_name or function.__name__
            self.registry[type_name][_name] = function
            return function

        return decorator


user_resolver = Resolver()


@user_resolver.query("user")
def resolve_user(
    parent: typing.Any, info: ResolveInfo[Context], id: str
) -> typing.Optional[User]:
    return info.context.store.find_by_id(id)


@user_resolver.query("users")
def resolve_users(parent: typing.Any, info: ResolveInfo[Context]) -> typing.List[User]:
    return info.context.store.all()


@user_resolver.mutation("createUser")
def resolve_create_user(
    parent: typing.Any,
    info: ResolveInfo[Context],
    username: str,
    email: typing.Optional[str] = None,
) -> User:
    user = info.context.store.insert(username, email=email)
    LOG.info(f"Created user {user.id}")
    return user


@user_resolver.mutation("deleteUser")
def resolve_delete_user(parent: typing.Any, info: ResolveInfo[Context], id: str) -> bool:
    deleted = info.context.store.remove_by_id(id)
    if deleted:
        LOG.info(f"Deleted user {id}")
    return deleted


@user_resolver.resolver("User", "createdAt")
def resolve_created_at(
    user: typing.Union[User, typing.Dict[str, typing.Any]], info: ResolveInfo[Context]
) -> typing.Optional[str]:
    # Resolvers added on an extended schema may hand back plain dicts
    if isinstance(user, dict):
        return user.get("createdAt")
    return getattr(user, "created_at", None)
