import datetime

from graphql import DocumentNode

import usergraph
from usergraph.operations import (
    CREATE_USER_MUTATION,
    DELETE_USER_MUTATION,
    USERS_QUERY,
)


async def test_user_query(api: usergraph.UserGraphAPI, user_query: DocumentNode):
    results = await api.call(user_query, variables={"id": "2"})
    assert results.errors is None
    assert results.data == {
        "user": {
            "id": "2",
            "username": "user1",
            "email": "user1@demo.com",
            "createdAt": "2024-01-02",
        }
    }


async def test_user_query_missing_is_null(
    api: usergraph.UserGraphAPI, user_query: DocumentNode
):
    results = await api.call(user_query, variables={"id": "999"})
    assert results.errors is None
    assert results.data == {"user": None}


async def test_users_query(api: usergraph.UserGraphAPI):
    results = await api.call(USERS_QUERY)
    assert results.errors is None
    assert results.data is not None
    assert [user["username"] for user in results.data["users"]] == ["admin", "user1"]


async def test_users_query_empty_store():
    api = usergraph.UserGraphAPI(store=usergraph.UserStore(seed=()))
    results = await api.call(USERS_QUERY)
    assert results.data == {"users": []}


async def test_create_user(api: usergraph.UserGraphAPI, today: datetime.date):
    results = await api.call(
        CREATE_USER_MUTATION,
        variables={"username": "carol", "email": "c@x.com"},
    )
    assert results.errors is None
    assert results.data == {
        "createUser": {
            "id": "3",
            "username": "carol",
            "email": "c@x.com",
            "createdAt": today.isoformat(),
        }
    }
    assert len(api.store) == 3


async def test_create_user_without_email(api: usergraph.UserGraphAPI):
    results = await api.call('mutation { createUser(username: "dave") { id email } }')
    assert results.errors is None
    assert results.data == {"createUser": {"id": "3", "email": None}}


async def test_create_user_requires_username(api: usergraph.UserGraphAPI):
    results = await api.call('mutation { createUser(email: "c@x.com") { id } }')
    assert results.data is None
    assert results.errors is not None
    assert results.errors[0].message == (
        "Field 'createUser' argument 'username' of type 'String!' is required,"
        " but it was not provided."
    )
    assert len(api.store) == 2


async def test_create_user_null_username_variable(api: usergraph.UserGraphAPI):
    results = await api.call(CREATE_USER_MUTATION, variables={"username": None})
    assert results.data is None
    assert results.errors is not None
    assert len(api.store) == 2


async def test_delete_user(api: usergraph.UserGraphAPI, user_query: DocumentNode):
    results = await api.call(DELETE_USER_MUTATION, variables={"id": "1"})
    assert results.errors is None
    assert results.data == {"deleteUser": True}

    results = await api.call(DELETE_USER_MUTATION, variables={"id": "1"})
    assert results.data == {"deleteUser": False}

    results = await api.call(user_query, variables={"id": "1"})
    assert results.data == {"user": None}


async def test_delete_missing_user(api: usergraph.UserGraphAPI):
    results = await api.call(DELETE_USER_MUTATION, variables={"id": "999"})
    assert results.errors is None
    assert results.data == {"deleteUser": False}
    assert [user.id for user in api.store] == ["1", "2"]


async def test_create_then_delete_scenario(api: usergraph.UserGraphAPI):
    await api.call(
        CREATE_USER_MUTATION,
        variables={"username": "carol", "email": "c@x.com"},
    )
    results = await api.call(DELETE_USER_MUTATION, variables={"id": "1"})
    assert results.data == {"deleteUser": True}

    results = await api.call(USERS_QUERY)
    assert results.data is not None
    assert [user["id"] for user in results.data["users"]] == ["2", "3"]


async def test_resolvers_are_bound_per_api():
    first = usergraph.UserGraphAPI()
    second = usergraph.UserGraphAPI()
    await first.call(CREATE_USER_MUTATION, variables={"username": "carol"})
    assert len(first.store) == 3
    assert len(second.store) == 2


async def test_created_at_from_dict_results():
    api = usergraph.UserGraphAPI(
        schema=[
            usergraph.USER_SCHEMA.read_text(),
            "extend type Query { newest: User }",
        ]
    )

    @api.query()
    def newest(parent, info):
        return {"id": "9", "username": "dict", "createdAt": "2026-10-19"}

    results = await api.call("query { newest { id createdAt } }")
    assert results.errors is None
    assert results.data == {"newest": {"id": "9", "createdAt": "2026-10-19"}}
