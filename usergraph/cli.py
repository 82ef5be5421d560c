import argparse
import json
import logging
import sys

import usergraph
from usergraph.contrib.config import load_settings
from usergraph.errors import format_errors
from usergraph.middleware import DebugMiddleware

LOG = logging.getLogger(__name__)

# create the top-level parser for global options
parser = argparse.ArgumentParser(
    prog="usergraph",
    description="Run operations against an in memory user graph.",
)
parser.add_argument(
    "--env-file",
    "--env_file",
    help="Specify a different dotenv file to read settings from.",
    default=".env",
)

# Sub Commands parser
subparsers = parser.add_subparsers(dest="command")  # type: ignore

subparsers.add_parser(
    "schema",
    help="Print the schema served by the graph.",
)

# create the parser for the "query" command
query_parser = subparsers.add_parser(
    "query",
    help="Execute a GraphQL document against a freshly seeded store.",
)
query_parser.add_argument(
    "document",
    help="The query or mutation document to execute.",
)
query_parser.add_argument(
    "--variables",
    "-v",
    help="Variables for the document as a JSON object.",
    default=None,
)
query_parser.add_argument(
    "--operation-name",
    "--operation_name",
    help="Name of the operation to run when the document holds several.",
    default=None,
)
query_parser.add_argument(
    "--debug",
    "-d",
    action="store_true",
    help="Display debug information while resolving fields.",
)


def build_api(env_file: str = ".env", debug: bool = False) -> usergraph.UserGraphAPI:
    settings = load_settings(env_file)
    middleware = [DebugMiddleware()] if debug or settings.debug else []
    store = usergraph.UserStore(
        seed=usergraph.SEED_USERS if settings.seed else (),
        strict_ids=settings.strict_ids,
    )
    return usergraph.UserGraphAPI(store=store, config=settings, middleware=middleware)


def run_query(
    api: usergraph.UserGraphAPI,
    document: str,
    variables: str | None,
    operation_name: str | None,
) -> dict:
    _variables = json.loads(variables) if variables else None
    results = api.call_sync(
        document, variables=_variables, operation_name=operation_name
    )
    output: dict = {"data": results.data}
    if errors := format_errors(results.errors, logger=LOG, level=logging.WARNING):
        output["errors"] = errors
    return output


def main():
    argv = sys.argv[1:] or ["--help"]
    options = parser.parse_args(argv)

    api = build_api(options.env_file, debug=getattr(options, "debug", False))

    level = logging.DEBUG if api.middleware else logging.INFO
    logging.basicConfig(level=level)

    if options.command == "schema":
        print(api.sdl)

    elif options.command == "query":
        output = run_query(
            api,
            document=options.document,
            variables=options.variables,
            operation_name=options.operation_name,
        )
        print(json.dumps(output, indent=2))
        if output.get("errors"):
            sys.exit(1)
