"""
Using the API
=============

`UserGraphAPI` ties the bundled `User` schema, the resolvers and a
`UserStore` together. Documents are parsed and validated by graphql-core
before any resolver runs::

    import usergraph

    api = usergraph.UserGraphAPI()

    results = api.call_sync(
        '''
        mutation {
            createUser(username: "carol", email: "c@x.com") { id createdAt }
        }
        '''
    )
    assert results.data["createUser"]["id"] == "3"

The same operations are available as plain methods for in process callers::

    carol = api.create_user("carol", email="c@x.com")
    assert api.user(carol.id) == carol
    assert api.delete_user(carol.id) is True

Every API owns its own store, so two instances never share records.
"""

import asyncio
import functools
import inspect
import logging
import pathlib
import typing

from graphql import (
    DocumentNode,
    ExecutionResult,
    GraphQLError,
    GraphQLObjectType,
    GraphQLSchema,
    execute,
    parse,
    print_schema,
    validate,
    validate_schema,
)

from usergraph.context import Context
from usergraph.errors import SchemaValidationError
from usergraph.operations import (
    CREATE_USER_MUTATION,
    DELETE_USER_MUTATION,
    USER_QUERY,
    USERS_QUERY,
)
from usergraph.resolvers import Resolver, user_resolver
from usergraph.schema import (
    USER_SCHEMA,
    TypeDefs,
    build_schema,
    load_schema,
)
from usergraph.store import User, UserStore

LOG = logging.getLogger(__name__)

SchemaSource = typing.Union[TypeDefs, pathlib.Path, typing.List[TypeDefs]]


class ParseResults(typing.NamedTuple):
    document: DocumentNode
    errors: typing.List[GraphQLError] = []


class OperationError(Exception):
    """Raised by the typed helpers when a document comes back with errors."""

    def __init__(self, errors: typing.List[GraphQLError]):
        self.errors = errors
        super().__init__("; ".join(error.message for error in errors))


class UserGraphAPI:
    """
    Your entry point into the user graph.

    :param schema: GraphQL schema, a str, `DocumentNode`, list of those or a `.graphql` file path.
    :param store: Store to serve, a freshly seeded `UserStore` by default.
    :param resolvers: Resolver collections to include, the user resolvers by default.
    :param context: Context class created for every request.
    :param middleware: List of graphql-core middleware to enable.
    :param config: Configuration object handed to the context.
    :param logger: Logger used when formatting errors.
    :param level: Level used when logging errors.
    :param kwargs: Any extra kwargs passed directly to graphql.execute function.
    """

    _schema: SchemaSource
    _kwargs: typing.Dict[str, typing.Any]

    def __init__(
        self,
        schema: SchemaSource = USER_SCHEMA,
        store: typing.Optional[UserStore] = None,
        resolvers: typing.Optional[typing.List[Resolver]] = None,
        context: typing.Optional[typing.Type[Context]] = None,
        middleware: typing.Optional[typing.List[typing.Any]] = None,
        config: typing.Optional[typing.Any] = None,
        logger: typing.Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        **kwargs,
    ):
        self._context = context or Context
        self._schema = schema
        self.store = store if store is not None else UserStore()
        self.middleware = middleware or []
        self.config = config
        self.logger = logger or LOG
        self.level = level
        self._kwargs = kwargs
        self.schema = self._build_schema()

        for resolver in [user_resolver] if resolvers is None else resolvers:
            self.include_resolver(resolver)

    def query(self, field_name: typing.Optional[str] = None) -> typing.Any:
        """Decorator that replaces the resolver of a `Query` field.

        The field is named after the function unless `field_name` is given::

            @api.query()
            def admins(parent, info):
                return [u for u in info.context.store if u.username == "admin"]
        """
        return self.resolver("Query", field_name)

    def mutation(self, field_name: typing.Optional[str] = None) -> typing.Any:
        """Same as `query`, for `Mutation` fields."""
        return self.resolver("Mutation", field_name)

    def resolver(
        self, type_name: str, field_name: typing.Optional[str] = None
    ) -> typing.Any:
        """Decorator that replaces the resolver of ``type_name.field_name``."""

        def bind(function):
            self._bind(type_name, field_name or function.__name__, function)
            return function

        return bind

    def include_resolver(self, resolver: Resolver):
        """Bind every function registered on `resolver`."""
        for type_name, fields in resolver.registry.items():
            for field_name, function in fields.items():
                self._bind(type_name, field_name, function)

    def _bind(
        self, type_name: str, field_name: str, function: typing.Callable[..., typing.Any]
    ) -> None:
        object_type = self.schema.get_type(type_name)
        if not isinstance(object_type, GraphQLObjectType):
            raise SchemaValidationError(
                f"Invalid type '{type_name}' in resolver decorator"
            )

        field = object_type.fields.get(field_name)
        if field is None:
            raise SchemaValidationError(
                f"Invalid field '{type_name}.{field_name}' in resolver decorator"
            )

        field.resolve = function
        LOG.debug(f"Resolving {type_name}.{field_name} with {function!r}")

    def _build_schema(self) -> GraphQLSchema:
        source = self._schema
        if isinstance(source, pathlib.Path):
            source = load_schema(source)
        type_defs = source if isinstance(source, list) else [source]

        schema = build_schema(*type_defs)
        if problems := validate_schema(schema):
            raise SchemaValidationError(f"Invalid schema: {problems}")
        return schema

    @property
    def sdl(self) -> str:
        return print_schema(self.schema)

    def get_context(
        self,
        request: typing.Any = None,
        context: typing.Optional[typing.Dict[str, typing.Any]] = None,
    ) -> Context:
        return self._context(
            request=request,
            config=self.config,
            store=self.store,
            **(context or {}),
        )

    # Both caches hold graphql-core results shared by every later call with
    # the same document, callers must not modify them.
    @functools.lru_cache(maxsize=128)
    def _parse(self, source: str) -> ParseResults:
        try:
            return ParseResults(parse(source))
        except GraphQLError as syntax_error:
            return ParseResults(DocumentNode(), [syntax_error])

    @functools.lru_cache(maxsize=128)
    def _validate(self, document: DocumentNode) -> typing.List[GraphQLError]:
        return validate(self.schema, document)

    def _execute(
        self,
        document: typing.Union[DocumentNode, str],
        request: typing.Any = None,
        variables: typing.Optional[typing.Dict[str, typing.Any]] = None,
        operation_name: typing.Optional[str] = None,
        context: typing.Optional[typing.Dict[str, typing.Any]] = None,
    ) -> typing.Union[ExecutionResult, typing.Awaitable[ExecutionResult]]:
        if isinstance(document, str):
            document, syntax_errors = self._parse(document)
            if syntax_errors:
                return ExecutionResult(data=None, errors=syntax_errors)

        # Missing required arguments are rejected here, before any resolver
        # touches the store.
        if invalid := self._validate(document):
            return ExecutionResult(data=None, errors=invalid)

        return execute(
            self.schema,
            document,
            context_value=self.get_context(request, context),
            variable_values=variables,
            operation_name=operation_name,
            middleware=self.middleware,
            **self._kwargs,
        )

    async def call(
        self,
        document: typing.Union[DocumentNode, str],
        request: typing.Any = None,
        variables: typing.Optional[typing.Dict[str, typing.Any]] = None,
        operation_name: typing.Optional[str] = None,
        context: typing.Optional[typing.Dict[str, typing.Any]] = None,
    ) -> ExecutionResult:
        """Run a document against the user graph from a running event loop.

        Syntax and validation problems come back in ``results.errors``,
        they are never raised.
        """
        result = self._execute(document, request, variables, operation_name, context)
        if inspect.isawaitable(result):
            return await result
        return typing.cast(ExecutionResult, result)

    def call_sync(
        self,
        document: typing.Union[DocumentNode, str],
        request: typing.Any = None,
        variables: typing.Optional[typing.Dict[str, typing.Any]] = None,
        operation_name: typing.Optional[str] = None,
        context: typing.Optional[typing.Dict[str, typing.Any]] = None,
    ) -> ExecutionResult:
        """Preform a query outside of an event loop.

        Async resolvers or middleware are run to completion with `asyncio.run`
        so this must not be called from a running loop in that case.
        """
        result = self._execute(document, request, variables, operation_name, context)
        if inspect.isawaitable(result):
            return asyncio.run(_wait_for(result))
        return typing.cast(ExecutionResult, result)

    def _call_operation(
        self, document: DocumentNode, **variables: typing.Any
    ) -> typing.Dict[str, typing.Any]:
        results = self.call_sync(document, variables=variables)
        if results.errors:
            raise OperationError(results.errors)
        return results.data or {}

    def user(self, id: str) -> typing.Optional[User]:
        data = self._call_operation(USER_QUERY, id=id)
        return User.from_dict(data["user"]) if data["user"] else None

    def users(self) -> typing.List[User]:
        data = self._call_operation(USERS_QUERY)
        return [User.from_dict(user) for user in data["users"]]

    def create_user(self, username: str, email: typing.Optional[str] = None) -> User:
        data = self._call_operation(
            CREATE_USER_MUTATION, username=username, email=email
        )
        return User.from_dict(data["createUser"])

    def delete_user(self, id: str) -> bool:
        data = self._call_operation(DELETE_USER_MUTATION, id=id)
        return bool(data["deleteUser"])


async def _wait_for(result: typing.Awaitable[ExecutionResult]) -> ExecutionResult:
    return await result
