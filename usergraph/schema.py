"""
Schema
------

The graph serves the `User` schema bundled as ``user.graphql``. Extra
documents can extend it, they are concatenated after the bundled one so
``extend type Query`` works::

    schema = build_schema(load_schema(), "extend type Query { admins: [User] }")
"""

import logging
import pathlib
import typing

from graphql import DocumentNode, GraphQLSchema, build_ast_schema, concat_ast, parse

LOG = logging.getLogger(__name__)

USER_SCHEMA = pathlib.Path(__file__).parent / "user.graphql"

TypeDefs = typing.Union[str, DocumentNode]


def gql(document: str) -> DocumentNode:
    """Parse a schema or operation document."""
    return parse(document)


def as_document(type_def: TypeDefs) -> DocumentNode:
    return parse(type_def) if isinstance(type_def, str) else type_def


def load_schema(path: typing.Union[str, pathlib.Path] = USER_SCHEMA) -> DocumentNode:
    """Read and parse a ``.graphql`` file, the bundled `User` schema by default."""
    path = pathlib.Path(path)
    LOG.debug(f"Loading schema from {path}")
    return parse(path.read_text())


def build_schema(*type_defs: TypeDefs) -> GraphQLSchema:
    """Build one schema out of several documents, in the order given."""
    document = concat_ast([as_document(type_def) for type_def in type_defs])
    return build_ast_schema(document)
