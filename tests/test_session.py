import pytest

from statusdog.api_client import AuthClient
from statusdog.errors import AuthError, TransportError, ValidationError
from statusdog.session import Route, SessionController, SessionState
from statusdog.storage import TOKEN_KEY


@pytest.fixture
def session(storage, config, backend):
    return SessionController(storage, AuthClient(config, backend))


class TestSessionController:
    def test_starts_anonymous_without_token(self, session):
        assert session.state is SessionState.ANONYMOUS
        assert session.home_route() is Route.LOGIN

    def test_starts_authenticated_with_stored_token(self, storage, config, backend):
        storage.set(TOKEN_KEY, "stored-token")
        session = SessionController(storage, AuthClient(config, backend))
        assert session.state is SessionState.AUTHENTICATED
        assert session.require_token() == "stored-token"
        assert session.home_route() is Route.DASHBOARD

    def test_valid_login_stores_token(self, session, storage):
        assert session.login("ada@example.com", "secret") is Route.DASHBOARD
        assert session.state is SessionState.AUTHENTICATED
        assert session.token
        assert storage.get(TOKEN_KEY) == session.token

    def test_invalid_login_leaves_session_anonymous(self, session, storage):
        with pytest.raises(TransportError):
            session.login("ada@example.com", "wrong")
        assert session.state is SessionState.ANONYMOUS
        assert session.token is None
        assert storage.get(TOKEN_KEY) is None

    def test_login_requires_both_fields(self, session, backend):
        with pytest.raises(ValidationError):
            session.login("  ", "secret")
        with pytest.raises(ValidationError):
            session.login("ada@example.com", "")
        assert backend.calls == []

    def test_register_routes_to_login_without_token(self, session, backend):
        assert session.register("Bob", "bob@example.com", "pw") is Route.LOGIN
        assert session.token is None
        assert session.state is SessionState.ANONYMOUS
        assert "bob@example.com" in backend.users

    def test_failed_register_propagates(self, session):
        with pytest.raises(TransportError):
            session.register("Ada", "ada@example.com", "secret")

    def test_logout_discards_token(self, session, storage):
        session.login("ada@example.com", "secret")
        assert session.logout() is Route.LOGIN
        assert session.state is SessionState.ANONYMOUS
        assert storage.get(TOKEN_KEY) is None
        with pytest.raises(AuthError):
            session.require_token()

    def test_epoch_changes_on_login_and_logout(self, session):
        start = session.epoch
        session.login("ada@example.com", "secret")
        after_login = session.epoch
        session.logout()
        assert start != after_login != session.epoch
        assert session.is_current(session.epoch)
        assert not session.is_current(start)
