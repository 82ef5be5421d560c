import datetime
import logging
import pathlib

import pytest
from graphql import DocumentNode

import usergraph

LOG = logging.getLogger("usergraph.tests")

REPORTS = pathlib.Path(__file__).parent.parent / "reports"
REPORTS.mkdir(exist_ok=True)

logging.basicConfig(
    level=logging.DEBUG,
    filename=REPORTS / "test-report.log",
    filemode="w",
)

TODAY = datetime.date(2026, 10, 19)


def pytest_runtest_setup(item):
    LOG.info("=======================================================")
    LOG.info(f"Running test: {item.name}")
    LOG.info("=======================================================")


@pytest.fixture
def today() -> datetime.date:
    return TODAY


@pytest.fixture
def store() -> usergraph.UserStore:
    return usergraph.UserStore(today=lambda: TODAY)


@pytest.fixture
def api(store) -> usergraph.UserGraphAPI:
    return usergraph.UserGraphAPI(store=store)


@pytest.fixture
def valid_schema() -> DocumentNode:
    return usergraph.gql(
        """
        type User {
            name: String
        }
        type Query {
            me: User
        }
        """
    )


@pytest.fixture
def user_query() -> DocumentNode:
    return usergraph.gql(
        """
        query User($id: ID!) {
            user(id: $id) { id username email createdAt }
        }
        """
    )
