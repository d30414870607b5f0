"""
UniJos Project Repository - Test Configuration and Fixtures
"""
import os

os.environ['STORAGE_BACKEND'] = 'memory'
os.environ['SEED_SAMPLE_DATA'] = 'false'

import pytest
from faker import Faker

from api import create_app
from db.seed_data import initialize_sample_data
from db.storage import MemoryStorage

fake = Faker()

DEMO_PASSWORD = 'password123'


@pytest.fixture
def storage():
    """Empty in-memory storage"""
    return MemoryStorage()


@pytest.fixture
def seeded_storage(storage):
    """Storage with the demo data"""
    initialize_sample_data(storage)
    return storage


@pytest.fixture
def app(seeded_storage):
    app = create_app(storage=seeded_storage, seed=False)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def test_user_data():
    """Registration payload for a new student"""
    password = fake.password(length=10)
    return {
        'email': fake.unique.email(),
        'password': password,
        'confirm_password': password,
        'name': fake.name(),
        'role': 'student',
        'department': 'Computer Science',
        'student_id': 'CS/2024/042',
    }


def login_as(client, role):
    """Log in as one of the demo accounts"""
    response = client.post('/api/auth/login', json={
        'email': f'{role}@unijos.edu.ng',
        'password': DEMO_PASSWORD,
        'role': role,
    })
    assert response.status_code == 200
    return response.get_json()['user']


@pytest.fixture
def student_client(client):
    login_as(client, 'student')
    return client


@pytest.fixture
def staff_client(client):
    login_as(client, 'staff')
    return client


@pytest.fixture
def admin_client(client):
    login_as(client, 'admin')
    return client


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Minimal stand-in for the Supabase query builder over an in-memory table"""

    def __init__(self, rows):
        self.rows = rows
        self.filters = []
        self.action = 'select'
        self.payload = None
        self.columns = '*'
        self.limit_num = None

    def select(self, columns='*'):
        self.action = 'select'
        self.columns = columns
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def limit(self, num):
        self.limit_num = num
        return self

    def upsert(self, payload, on_conflict=None):
        self.action = 'upsert'
        self.payload = payload
        self.on_conflict = on_conflict.split(',') if on_conflict else ['id']
        return self

    def delete(self):
        self.action = 'delete'
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        if self.action == 'upsert':
            for row in self.rows:
                if all(row.get(c) == self.payload.get(c) for c in self.on_conflict):
                    row.update(self.payload)
                    return FakeResponse([row])
            self.rows.append(dict(self.payload))
            return FakeResponse([self.payload])

        if self.action == 'delete':
            removed = [row for row in self.rows if self._matches(row)]
            self.rows[:] = [row for row in self.rows if not self._matches(row)]
            return FakeResponse(removed)

        matched = [row for row in self.rows if self._matches(row)]
        if self.limit_num is not None:
            matched = matched[:self.limit_num]
        if self.columns != '*':
            wanted = [c.strip() for c in self.columns.split(',')]
            matched = [{c: row.get(c) for c in wanted} for row in matched]
        return FakeResponse(matched)


class FakeSupabase:
    def __init__(self):
        self.tables = {}

    def table(self, name):
        return FakeQuery(self.tables.setdefault(name, []))


@pytest.fixture
def fake_supabase():
    return FakeSupabase()
