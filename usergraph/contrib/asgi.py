"""
Serving over HTTP
=================

`create_app` builds a FastAPI application that keeps a `UserGraphAPI` on
``app.state.graph`` and answers GraphQL documents posted to one route::

    from usergraph.contrib.asgi import create_app

    app = create_app()

Run it with any ASGI server, ``uvicorn module:app``. The printed schema is
served from ``GET <path>/schema``.

Routes of your own can reuse the same graph and add per request context::

    @app.post("/tenant/graphql")
    async def tenant_graph(
        body: OperationBody,
        request: fastapi.Request,
        graph: typing.Annotated[UserGraphAPI, fastapi.Depends(get_graph)],
    ) -> OperationResponse:
        tenant = request.headers.get("x-tenant")
        return await run_operation(graph, body, request, context={"tenant": tenant})
"""

import typing

import fastapi
import pydantic
from fastapi.responses import PlainTextResponse

from usergraph.api import UserGraphAPI
from usergraph.errors import format_errors

ContextFactory = typing.Callable[
    [fastapi.Request], typing.Optional[typing.Dict[str, typing.Any]]
]


class OperationBody(pydantic.BaseModel):
    """A document with its variables, as posted by GraphQL clients."""

    query: str
    variables: typing.Optional[typing.Dict[str, typing.Any]] = None
    operation_name: typing.Optional[str] = pydantic.Field(
        default=None, alias="operationName"
    )


class OperationResponse(pydantic.BaseModel):
    data: typing.Optional[typing.Dict[str, typing.Any]] = None
    errors: typing.Optional[typing.List[typing.Dict[str, typing.Any]]] = None
    extensions: typing.Optional[typing.Dict[str, typing.Any]] = None


def get_graph(request: fastapi.Request) -> UserGraphAPI:
    return request.app.state.graph


async def run_operation(
    graph: UserGraphAPI,
    body: OperationBody,
    request: typing.Optional[fastapi.Request] = None,
    context: typing.Optional[typing.Dict[str, typing.Any]] = None,
) -> OperationResponse:
    results = await graph.call(
        document=body.query,
        request=request,
        variables=body.variables,
        operation_name=body.operation_name,
        context=context,
    )
    return OperationResponse(
        data=results.data,
        errors=format_errors(results.errors, logger=graph.logger, level=graph.level),
        extensions=results.extensions,
    )


def create_app(
    graph: typing.Optional[UserGraphAPI] = None,
    path: str = "/graphql",
    debug: bool = False,
    context_factory: typing.Optional[ContextFactory] = None,
) -> fastapi.FastAPI:
    """Build a FastAPI application serving the user graph.

    :param graph: Graph to serve, a fresh `UserGraphAPI` by default.
    :param path: Route that accepts posted documents.
    :param debug: Passed on to FastAPI.
    :param context_factory: Called with each request, returns extra context values.
    """
    app = fastapi.FastAPI(debug=debug)
    app.state.graph = graph or UserGraphAPI()

    @app.post(path)
    async def graphql(
        body: OperationBody,
        request: fastapi.Request,
        graph: typing.Annotated[UserGraphAPI, fastapi.Depends(get_graph)],
    ) -> OperationResponse:
        context = context_factory(request) if context_factory else None
        return await run_operation(graph, body, request, context)

    @app.get(f"{path}/schema", response_class=PlainTextResponse)
    async def schema(
        graph: typing.Annotated[UserGraphAPI, fastapi.Depends(get_graph)],
    ) -> str:
        return graph.sdl

    return app
