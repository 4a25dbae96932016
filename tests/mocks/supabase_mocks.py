"""
In-memory stand-in for the Supabase client.

Supports the subset of the query builder the storage layer uses
(select/eq/in_/limit/insert/update/upsert/delete/execute), rpc() with
per-procedure handlers, and auth.get_session / sign_in_with_password.
"""
import copy
import itertools
from types import SimpleNamespace


class BackendDown(Exception):
    pass


class FakeQuery:
    def __init__(self, client, table_name):
        self.client = client
        self.table_name = table_name
        self.operation = 'select'
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.row_limit = None
        self.columns = None

    # builder methods

    def select(self, columns='*'):
        self.operation = 'select'
        self.columns = columns
        return self

    def insert(self, payload):
        self.operation = 'insert'
        self.payload = payload
        return self

    def update(self, payload):
        self.operation = 'update'
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict=None):
        self.operation = 'upsert'
        self.payload = payload
        self.on_conflict = on_conflict
        return self

    def delete(self):
        self.operation = 'delete'
        return self

    def eq(self, column, value):
        self.filters.append(('eq', column, value))
        return self

    def in_(self, column, values):
        self.filters.append(('in', column, list(values)))
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    # execution

    def _matches(self, row):
        for kind, column, value in self.filters:
            if kind == 'eq' and row.get(column) != value:
                return False
            if kind == 'in' and row.get(column) not in value:
                return False
        return True

    def execute(self):
        self.client.calls.append(SimpleNamespace(table=self.table_name, operation=self.operation,
                                                 filters=list(self.filters), payload=self.payload,
                                                 limit=self.row_limit, on_conflict=self.on_conflict))
        if self.table_name in self.client.failing:
            raise BackendDown(f"{self.table_name} is unavailable")

        rows = self.client.tables.setdefault(self.table_name, [])

        if self.operation == 'select':
            data = [copy.deepcopy(r) for r in rows if self._matches(r)]
            if self.row_limit is not None:
                data = data[:self.row_limit]
            return SimpleNamespace(data=data)

        if self.operation == 'insert':
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for row in new_rows:
                row = dict(row)
                row.setdefault('id', next(self.client.ids))
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            return SimpleNamespace(data=inserted)

        if self.operation == 'update':
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(copy.deepcopy(row))
            return SimpleNamespace(data=updated)

        if self.operation == 'upsert':
            keys = [k.strip() for k in (self.on_conflict or 'id').split(',')]
            for row in rows:
                if all(row.get(k) == self.payload.get(k) for k in keys):
                    row.update(self.payload)
                    return SimpleNamespace(data=[copy.deepcopy(row)])
            row = dict(self.payload)
            row.setdefault('id', next(self.client.ids))
            rows.append(row)
            return SimpleNamespace(data=[copy.deepcopy(row)])

        if self.operation == 'delete':
            removed = [r for r in rows if self._matches(r)]
            self.client.tables[self.table_name] = [r for r in rows if not self._matches(r)]
            return SimpleNamespace(data=removed)

        raise AssertionError(f"unsupported operation {self.operation}")


class FakeRpc:
    def __init__(self, client, name, params):
        self.client = client
        self.name = name
        self.params = params

    def execute(self):
        self.client.rpc_calls.append((self.name, dict(self.params)))
        if self.name in self.client.failing:
            raise BackendDown(f"{self.name} is unavailable")
        handler = self.client.rpc_handlers.get(self.name)
        if handler is None:
            raise BackendDown(f"function {self.name} does not exist")
        data = handler(self.params) if callable(handler) else handler
        return SimpleNamespace(data=copy.deepcopy(data))


class FakeAuth:
    def __init__(self, client):
        self.client = client
        self.user_id = None
        self.email = None
        self.passwords = {}

    def _session(self):
        if self.user_id is None:
            return None
        return SimpleNamespace(user=SimpleNamespace(id=self.user_id, email=self.email))

    def get_session(self):
        if 'auth' in self.client.failing:
            raise BackendDown("auth is unavailable")
        return self._session()

    def sign_in_with_password(self, credentials):
        email = credentials['email']
        if email not in self.passwords or self.passwords[email][0] != credentials['password']:
            raise BackendDown("Invalid login credentials")
        self.email = email
        self.user_id = self.passwords[email][1]
        return SimpleNamespace(user=self._session().user, session=self._session())


class FakeSupabase:
    def __init__(self, tables=None):
        self.tables = {name: [dict(r) for r in rows] for name, rows in (tables or {}).items()}
        self.rpc_handlers = {}
        self.failing = set()
        self.calls = []
        self.rpc_calls = []
        self.ids = itertools.count(1000)
        self.auth = FakeAuth(self)

    def table(self, name):
        return FakeQuery(self, name)

    def rpc(self, name, params=None):
        return FakeRpc(self, name, params or {})

    def rows(self, name):
        return self.tables.get(name, [])


def mentor_row(mentorid, skills=None, roles=None, **extra):
    """A mentors table row with sensible defaults."""
    row = {
        'mentorid': mentorid,
        'userid': f"mentor-user-{mentorid}",
        'name': f"Mentor Name {mentorid}",
        'bio': "Security practitioner",
        'hourly_rate': 80,
        'skills': skills or [],
        'specialization_roles': roles or [],
        'experience_level': 'Senior',
        'years_of_experience': 10,
        'availability_hours_per_week': 4,
        'certifications': ['CISSP'],
        'location': 'Melbourne, AU',
        'active': True,
        'verified': True,
        'upvotes': 0,
        'downvotes': 0,
    }
    row.update(extra)
    return row
