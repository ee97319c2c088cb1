import os

import mongomock
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault('MONGODB_URI', 'mongodb://localhost:27017')
os.environ.setdefault('DB_NAME', 'drill_tracker_test')
os.environ.setdefault('SECRET_KEY', 'test-secret-key')
os.environ.setdefault('BCRYPT_ROUNDS', '4')

from main import app  # noqa: E402
from services.auth_service import get_token_codec  # noqa: E402
from services.token_service import TokenCodec  # noqa: E402
from services.user_store import UserStore, get_user_store  # noqa: E402


@pytest.fixture
def store() -> UserStore:
    collection = mongomock.MongoClient().db['users']
    return UserStore(collection)


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec('unit-test-secret')


@pytest.fixture
def client(store: UserStore, codec: TokenCodec):
    app.dependency_overrides[get_user_store] = lambda: store
    app.dependency_overrides[get_token_codec] = lambda: codec
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client: TestClient, **overrides) -> dict:
    body = {
        'name': 'Asha Student',
        'email': 'asha@example.edu',
        'password': 'hunter22',
        'role': 'student',
        'schoolId': 'school-1',
    }
    body.update(overrides)
    response = client.post('/api/register', json=body)
    assert response.status_code == 201, response.text
    return body


def login_token(client: TestClient, body: dict) -> str:
    response = client.post(
        '/api/login',
        json={'email': body['email'], 'password': body['password'], 'role': body['role']},
    )
    assert response.status_code == 200, response.text
    return response.json()['token']


def auth_header(token: str) -> dict:
    return {'Authorization': f'Bearer {token}'}
