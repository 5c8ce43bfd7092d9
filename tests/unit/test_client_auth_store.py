"""Unit tests for the client-side AuthStore."""

import pytest
from pytest_httpx import HTTPXMock

from src.client.api_client import ApiClient
from src.client.auth_store import LOGGED_IN_KEY, TOKEN_KEY, USER_KEY, AuthStore
from src.client.errors import PROVIDER_SIGN_IN_ERRORS, UNAUTHORIZED
from src.client.local_storage import LocalStorage

BASE_URL = "http://api.test"
ENDPOINT = "https://mypod.store"
USER = {
    "id": "6f0c1f5e-6a34-4e86-9f5e-4f1f3b7c2a10",
    "name": "alice",
    "webId": "https://mypod.store/alice",
}


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def store(storage):
    client = ApiClient(BASE_URL)
    yield AuthStore(client, storage)
    client.close()


@pytest.mark.unit
class TestAuthStoreLogin:
    """Test login/signup flows."""

    def test_login_stores_session(self, store, storage, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/login",
            json={"token": "jwt-token", "user": USER},
        )

        response = store.login("alice", "pw", ENDPOINT)

        assert response.status == 200
        assert store.is_logged_in is True
        assert store.token == "jwt-token"
        assert store.user == USER
        assert storage.get_item(TOKEN_KEY) == "jwt-token"
        assert storage.get_item(LOGGED_IN_KEY) is True
        assert storage.get_item(USER_KEY) == USER

    def test_login_sends_provider_endpoint(self, store, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/login",
            json={"token": "jwt-token", "user": USER},
            match_json={
                "username": "alice",
                "password": "pw",
                "providerEndpoint": ENDPOINT,
            },
        )

        assert store.login("alice", "pw", ENDPOINT).status == 200

    def test_login_failure_leaves_state_untouched(
        self, store, storage, httpx_mock: HTTPXMock
    ):
        message = "Endpoint didn't respond with a 200 status code"
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/login",
            status_code=400,
            json={"detail": message},
        )

        response = store.login("alice", "wrong", ENDPOINT)

        assert response.status == 400
        assert response.data == PROVIDER_SIGN_IN_ERRORS[message]
        assert store.is_logged_in is False
        assert storage.get_item(TOKEN_KEY) is None

    def test_already_logged_in_204_keeps_session(self, store, httpx_mock: HTTPXMock):
        """A 204 (cookie still valid) does not alter local state."""
        store.set_logged_in(True)
        store.set_token("existing-token")
        httpx_mock.add_response(method="POST", url=f"{BASE_URL}/login", status_code=204)

        response = store.login("alice", "pw", ENDPOINT)

        assert response.status == 204
        assert store.token == "existing-token"
        assert httpx_mock.get_request().headers["auth"] == "existing-token"

    def test_signup_stores_session(self, store, storage, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/signup",
            json={"message": "Successfully signed up", "token": "jwt-token", "user": USER},
        )

        response = store.signup("alice", "pw", "alice@example.com", ENDPOINT)

        assert response.status == 200
        assert store.is_logged_in is True
        assert storage.get_item(TOKEN_KEY) == "jwt-token"

    def test_signup_message_only_does_not_log_in(self, store, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/signup",
            json={"message": "You are already logged in"},
        )

        store.signup("alice", "pw", "alice@example.com", ENDPOINT)

        assert store.is_logged_in is False
        assert store.token == ""


@pytest.mark.unit
class TestAuthStoreSession:
    """Test logout and session restore."""

    def test_logout_clears_state_and_storage(self, store, storage):
        store.set_user(USER)
        store.set_logged_in(True)
        store.set_token("jwt-token")

        store.logout()

        assert store.user is None
        assert store.is_logged_in is False
        assert store.token == ""
        for key in (USER_KEY, LOGGED_IN_KEY, TOKEN_KEY):
            assert storage.get_item(key) is None

    def test_unauthorized_response_logs_out(self, store, storage, httpx_mock: HTTPXMock):
        store.set_logged_in(True)
        store.set_token("stale-token")
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/posts",
            status_code=401,
            json={"detail": "Invalid authentication token"},
        )

        response = store.client.fetch_posts()

        assert response.data == UNAUTHORIZED
        assert store.is_logged_in is False
        assert storage.get_item(TOKEN_KEY) is None

    def test_authenticate_user_restores_session(self, store, storage):
        storage.set_item(TOKEN_KEY, "jwt-token")
        storage.set_item(LOGGED_IN_KEY, True)
        storage.set_item(USER_KEY, USER)

        fresh = AuthStore(store.client, storage)

        assert fresh.authenticate_user() is True
        assert fresh.token == "jwt-token"
        assert fresh.user == USER
        assert fresh.client.get_auth() == "jwt-token"

    def test_authenticate_user_without_session(self, store):
        assert store.authenticate_user() is False
        assert store.is_logged_in is False

    def test_authenticate_user_inconsistent_state_logs_out(self, store, storage):
        """A logged-in flag without a token is discarded."""
        storage.set_item(LOGGED_IN_KEY, True)
        storage.set_item(USER_KEY, USER)

        assert store.authenticate_user() is False
        assert storage.get_item(LOGGED_IN_KEY) is None
        assert storage.get_item(USER_KEY) is None
