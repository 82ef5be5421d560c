"""
User Store
==========

In memory storage for the `User` records served by the graph. The store is
a plain ordered list, records are appended on insert and removed in place
on delete so iteration always follows insertion order::

    store = UserStore()
    carol = store.insert("carol", email="c@x.com")
    assert store.find_by_id(carol.id) == carol
    assert store.remove_by_id(carol.id) is True
    assert store.remove_by_id(carol.id) is False

Identifiers
-----------

By default new ids are derived from the current size of the store
(``str(len(store) + 1)``). After a delete this can hand out an id that
is still in use, pass ``strict_ids=True`` to use a counter that only
ever moves forward instead.
"""

import dataclasses
import datetime
import logging
import typing

LOG = logging.getLogger(__name__)


@dataclasses.dataclass
class User:
    id: str
    username: str
    email: typing.Optional[str] = None
    created_at: typing.Optional[str] = None

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        """Return the record keyed by the GraphQL field names."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: typing.Dict[str, typing.Any]) -> "User":
        return cls(
            id=data["id"],
            username=data["username"],
            email=data.get("email"),
            created_at=data.get("createdAt"),
        )


SEED_USERS: typing.Tuple[User, ...] = (
    User(id="1", username="admin", email="admin@demo.com", created_at="2024-01-01"),
    User(id="2", username="user1", email="user1@demo.com", created_at="2024-01-02"),
)


class UserStore:
    """Ordered collection of users.

    :param seed: Records to start with, copied so the originals are never mutated.
    :param strict_ids: Issue ids from a counter that never reuses a value.
    :param today: Callable returning the current date, used for `created_at`.
        Defaults to the UTC date.
    """

    _users: typing.List[User]

    def __init__(
        self,
        seed: typing.Iterable[User] = SEED_USERS,
        strict_ids: bool = False,
        today: typing.Optional[typing.Callable[[], datetime.date]] = None,
    ):
        self._users = [dataclasses.replace(user) for user in seed]
        self.strict_ids = strict_ids
        self._today = today or utc_today
        self._counter = max((_as_int(user.id) for user in self._users), default=0)
        LOG.debug(f"Store initialized with {len(self._users)} users")

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> typing.Iterator[User]:
        return iter(list(self._users))

    def __contains__(self, id: object) -> bool:
        return self.find_by_id(typing.cast(str, id)) is not None

    def find_by_id(self, id: str) -> typing.Optional[User]:
        for user in self._users:
            if user.id == id:
                return user
        return None

    def all(self) -> typing.List[User]:
        return list(self._users)

    def insert(self, username: str, email: typing.Optional[str] = None) -> User:
        user = User(
            id=self._next_id(),
            username=username,
            email=email,
            created_at=self._today().isoformat(),
        )
        self._users.append(user)
        LOG.debug(f"Inserted user {user.id} ({user.username})")
        return user

    def remove_by_id(self, id: str) -> bool:
        for index, user in enumerate(self._users):
            if user.id == id:
                del self._users[index]
                LOG.debug(f"Removed user {id}")
                return True

        LOG.debug(f"No user {id} to remove")
        return False

    def _next_id(self) -> str:
        if not self.strict_ids:
            return str(len(self._users) + 1)

        # Never go backwards, even if a seed record carries a higher id.
        self._counter = max(self._counter, len(self._users)) + 1
        return str(self._counter)


def utc_today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


def _as_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0
