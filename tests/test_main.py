import pytest
from fastapi.testclient import TestClient

import main
from services.token_service import TokenCodec


def test_startup_creates_indexes(store, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, 'get_user_store', lambda: store)

    with TestClient(main.app) as client:
        assert client.get('/health').json() == {'status': 'healthy'}

    index_names = set(store.collection.index_information())
    assert {'uniq_email_role', 'uniq_admin_per_school', 'role_school'} <= index_names


def test_startup_refuses_blank_secret(store, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main, 'get_user_store', lambda: store)
    monkeypatch.setattr(main, 'get_token_codec', lambda: TokenCodec('  '))

    with pytest.raises(ValueError):
        with TestClient(main.app):
            pass
