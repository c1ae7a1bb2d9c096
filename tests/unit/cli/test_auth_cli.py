"""
Tests for the auth command group.
"""

from __future__ import annotations

from typer.testing import CliRunner

from myhours.cli.main import app
from myhours.exceptions import AuthError, CredentialStoreError
from tests.factories.session_factory import TokenGrantFactory
from tests.fakes import NOW_MS

runner = CliRunner()


class TestLogin:
    def test_already_authenticated(self, cli_container, mock_client):
        result = runner.invoke(app, ["auth", "login"])

        assert result.exit_code == 0
        assert "Already authenticated as ada@example.com" in result.output
        mock_client.login.assert_not_called()

    def test_login_when_not_authenticated(self, cli_container, mock_client, memory_store):
        memory_store.session = None
        mock_client.login.return_value = TokenGrantFactory(access_token="new")

        result = runner.invoke(app, ["auth", "login"])

        assert result.exit_code == 0
        assert "Authentication successful!" in result.output
        mock_client.login.assert_called_once_with("ada@example.com", "secret")
        assert memory_store.session.access_token == "new"

    def test_force_login(self, cli_container, mock_client, memory_store):
        mock_client.login.return_value = TokenGrantFactory(access_token="forced")

        result = runner.invoke(app, ["auth", "login", "--force"])

        assert result.exit_code == 0
        assert memory_store.session.access_token == "forced"

    def test_rejected_login(self, cli_container, mock_client, memory_store):
        memory_store.session = None
        mock_client.login.side_effect = AuthError("ApiError Invalid credentials", 400)

        result = runner.invoke(app, ["auth", "login"])

        assert result.exit_code == 1
        assert "Invalid credentials" in result.output
        assert memory_store.session is None


class TestLogout:
    def test_logout_with_confirmation_flag(self, cli_container, memory_store):
        result = runner.invoke(app, ["auth", "logout", "--yes"])

        assert result.exit_code == 0
        assert "Successfully logged out!" in result.output
        assert memory_store.session is None

    def test_logout_cancelled(self, cli_container, memory_store):
        result = runner.invoke(app, ["auth", "logout"], input="n\n")

        assert result.exit_code == 0
        assert "Logout cancelled." in result.output
        assert memory_store.session is not None

    def test_logout_when_not_authenticated(self, cli_container, memory_store):
        memory_store.session = None

        result = runner.invoke(app, ["auth", "logout", "-y"])

        assert result.exit_code == 0
        assert "Not currently authenticated" in result.output

    def test_logout_reports_removal_failure(self, cli_container, memory_store, monkeypatch):
        def denied():
            raise CredentialStoreError("Could not remove storage: creds.json: denied")

        monkeypatch.setattr(memory_store, "clear", denied)

        result = runner.invoke(app, ["auth", "logout", "-y"])

        assert result.exit_code == 1
        assert "Could not remove storage" in result.output
        assert "Traceback" not in result.output


class TestStatus:
    def test_not_authenticated(self, cli_container, memory_store):
        memory_store.session = None

        result = runner.invoke(app, ["auth", "status"])

        assert result.exit_code == 0
        assert "Not authenticated" in result.output

    def test_authenticated(self, cli_container, mock_client):
        result = runner.invoke(app, ["auth", "status"])

        assert result.exit_code == 0
        assert "ada@example.com" in result.output
        assert "Authenticated" in result.output
        mock_client.refresh.assert_not_called()

    def test_expired(self, cli_container, memory_store):
        memory_store.session = memory_store.session.model_copy(
            update={"expires_at": NOW_MS - 1}
        )

        result = runner.invoke(app, ["auth", "status"])

        assert result.exit_code == 0
        assert "Token Expired" in result.output


class TestRefresh:
    def test_refresh(self, cli_container, mock_client, memory_store):
        mock_client.refresh.return_value = TokenGrantFactory(access_token="again")

        result = runner.invoke(app, ["auth", "refresh"])

        assert result.exit_code == 0
        assert "Tokens refreshed successfully!" in result.output
        mock_client.refresh.assert_called_once_with("refresh-token")
        assert memory_store.session.access_token == "again"

    def test_refresh_without_session(self, cli_container, memory_store):
        memory_store.session = None

        result = runner.invoke(app, ["auth", "refresh"])

        assert result.exit_code == 1
        assert "Not authenticated" in result.output
