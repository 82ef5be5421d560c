"""
Pre-parsed documents for the four user operations. These are used by the
typed helpers on `UserGraphAPI` and are handy for clients that want to skip
parsing on every request.
"""

from usergraph.schema import gql

USER_FIELDS = "id username email createdAt"

USER_QUERY = gql(
    f"""
    query User($id: ID!) {{
        user(id: $id) {{ {USER_FIELDS} }}
    }}
    """
)

USERS_QUERY = gql(
    f"""
    query Users {{
        users {{ {USER_FIELDS} }}
    }}
    """
)

CREATE_USER_MUTATION = gql(
    f"""
    mutation CreateUser($username: String!, $email: String) {{
        createUser(username: $username, email: $email) {{ {USER_FIELDS} }}
    }}
    """
)

DELETE_USER_MUTATION = gql(
    """
    mutation DeleteUser($id: ID!) {
        deleteUser(id: $id)
    }
    """
)
