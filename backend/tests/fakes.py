from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from jose import jwt
from supabase import AuthError

TEST_JWT_SECRET = "test-jwt-secret"


def make_token(user_id: str, email: Optional[str] = None, *, secret: str = TEST_JWT_SECRET,
               audience: str = "authenticated") -> str:
    claims: Dict[str, Any] = {"sub": user_id, "aud": audience, "role": "authenticated"}
    if email:
        claims["email"] = email
    return jwt.encode(claims, secret, algorithm="HS256")


class FakeAuthError(AuthError):
    def __init__(self, message: str):
        Exception.__init__(self, message)
        self.message = message


class FakeQuery:
    """
    Just enough of the postgrest request builder: eq / order / limit filters
    and an awaitable execute() over the fake's in-memory rows.
    """

    def __init__(self, backend: "FakeSupabase", table: str, op: str, payload: Any = None):
        self.backend = backend
        self.table = table
        self.op = op
        self.payload = payload
        self.filters: List[tuple] = []
        self.ordering: Optional[tuple] = None
        self.row_limit: Optional[int] = None

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, *, desc: bool = False) -> "FakeQuery":
        self.ordering = (column, desc)
        return self

    def limit(self, n: int) -> "FakeQuery":
        self.row_limit = n
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(str(row.get(col)) == str(val) for col, val in self.filters)

    async def execute(self) -> SimpleNamespace:
        self.backend.queries.append(self)
        if self.backend.fail_with is not None:
            raise self.backend.fail_with

        rows = self.backend.tables.setdefault(self.table, [])

        if self.op == "select":
            data = [dict(r) for r in rows if self._matches(r)]
            if self.ordering is not None:
                column, desc = self.ordering
                data.sort(key=lambda r: r[column], reverse=desc)
            if self.row_limit is not None:
                data = data[: self.row_limit]
            return SimpleNamespace(data=data)

        if self.op == "insert":
            row = dict(self.payload)
            row["id"] = self.backend.next_id()
            row["created_at"] = self.backend.next_timestamp()
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        if self.op == "update":
            changed = []
            for r in rows:
                if self._matches(r):
                    r.update(self.payload)
                    changed.append(dict(r))
            return SimpleNamespace(data=changed)

        if self.op == "delete":
            removed = [dict(r) for r in rows if self._matches(r)]
            self.backend.tables[self.table] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=removed)

        raise AssertionError(f"unknown op {self.op}")


class FakeTable:
    def __init__(self, backend: "FakeSupabase", name: str):
        self.backend = backend
        self.name = name

    def select(self, *columns: str) -> FakeQuery:
        return FakeQuery(self.backend, self.name, "select")

    def insert(self, row: Dict[str, Any]) -> FakeQuery:
        return FakeQuery(self.backend, self.name, "insert", row)

    def update(self, fields: Dict[str, Any]) -> FakeQuery:
        return FakeQuery(self.backend, self.name, "update", fields)

    def delete(self) -> FakeQuery:
        return FakeQuery(self.backend, self.name, "delete")


class FakeAdmin:
    def __init__(self):
        self.revoked: List[str] = []

    async def sign_out(self, jwt: str, scope: str = "global") -> None:
        self.revoked.append(jwt)


class FakeAuth:
    """In-memory stand-in for the client's auth namespace."""

    def __init__(self):
        self.users: Dict[str, Dict[str, str]] = {}
        self.require_confirmation = False
        self.sign_out_calls = 0
        self.fail_with: Optional[Exception] = None
        self.admin = FakeAdmin()
        self.closed = False

    def _response(self, user: Dict[str, str], with_session: bool = True) -> SimpleNamespace:
        u = SimpleNamespace(id=user["id"], email=user["email"])
        session = None
        if with_session:
            session = SimpleNamespace(access_token=make_token(user["id"], user["email"]), user=u)
        return SimpleNamespace(user=u, session=session)

    async def sign_up(self, credentials: Dict[str, str]) -> SimpleNamespace:
        if self.fail_with is not None:
            raise self.fail_with
        email = credentials["email"]
        if email in self.users:
            raise FakeAuthError("User already registered")
        user = {"id": f"user-{len(self.users) + 1}", "email": email,
                "password": credentials["password"]}
        self.users[email] = user
        return self._response(user, with_session=not self.require_confirmation)

    async def sign_in_with_password(self, credentials: Dict[str, str]) -> SimpleNamespace:
        if self.fail_with is not None:
            raise self.fail_with
        user = self.users.get(credentials["email"])
        if user is None or user["password"] != credentials["password"]:
            raise FakeAuthError("Invalid login credentials")
        return self._response(user)

    async def sign_out(self) -> None:
        self.sign_out_calls += 1

    async def close(self) -> None:
        self.closed = True


class FakePostgrest:
    def __init__(self):
        self.token: Optional[str] = None
        self.closed = False

    def auth(self, token: str) -> None:
        self.token = token

    async def aclose(self) -> None:
        self.closed = True


class FakeSupabase:
    """The slice of ``supabase.AsyncClient`` that dailytasks talks to."""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.queries: List[FakeQuery] = []
        self.fail_with: Optional[Exception] = None
        self.auth = FakeAuth()
        self.postgrest = FakePostgrest()
        self._id = 0
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def table(self, name: str) -> FakeTable:
        return FakeTable(self, name)

    def next_id(self) -> int:
        self._id += 1
        return self._id

    def next_timestamp(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def rows(self, table: str = "tasks") -> List[Dict[str, Any]]:
        return self.tables.get(table, [])


class FakeSocket:
    def __init__(self, broken: bool = False):
        self.broken = broken
        self.accepted = False
        self.sent: List[dict] = []

    async def accept(self):
        self.accepted = True

    async def send_json(self, message: dict):
        if self.broken:
            raise RuntimeError("socket closed")
        self.sent.append(message)
