"""Tests for the credential provider."""

import json

from dokumentovac.services.credentials import CredentialProvider


class TestCredentialProvider:
    """Tests for login, logout and persistence."""

    def test_empty_provider(self) -> None:
        credentials = CredentialProvider()
        assert credentials.token is None
        assert credentials.is_authenticated is False

    def test_login_persists_session(self, tmp_path) -> None:
        path = tmp_path / "session.json"
        credentials = CredentialProvider(session_path=path)

        assert credentials.login("abc", "jan@example.sk") is True

        assert json.loads(path.read_text()) == {
            "access_token": "abc",
            "user_email": "jan@example.sk",
        }
        restored = CredentialProvider.from_session(path)
        assert restored.token == "abc"
        assert restored.user == "jan@example.sk"

    def test_login_rejects_empty_values(self) -> None:
        credentials = CredentialProvider("old", "jan@example.sk")
        assert credentials.login("", "jan@example.sk") is False
        assert credentials.login("new", "") is False
        assert credentials.token == "old"

    def test_logout_removes_session(self, tmp_path) -> None:
        path = tmp_path / "session.json"
        credentials = CredentialProvider(session_path=path)
        credentials.login("abc", "jan@example.sk")

        credentials.logout()

        assert not path.exists()
        assert credentials.user is None
        assert credentials.is_authenticated is False

    def test_default_session_lives_in_config_dir(self, isolated_config) -> None:
        credentials = CredentialProvider.from_session()
        credentials.login("abc", "jan@example.sk")
        assert (isolated_config / "session.json").exists()

    def test_env_token_overrides_session(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "session.json"
        path.write_text(json.dumps({"access_token": "stored", "user_email": "jan@example.sk"}))
        monkeypatch.setenv("DOKUMENTOVAC_TOKEN", "from-env")

        assert CredentialProvider.from_session(path).token == "from-env"

    def test_unreadable_session_is_ignored(self, tmp_path) -> None:
        path = tmp_path / "session.json"
        path.write_text("{not json")
        assert CredentialProvider.from_session(path).is_authenticated is False

    def test_listeners(self) -> None:
        credentials = CredentialProvider()
        seen = []
        unsubscribe = credentials.subscribe(seen.append)

        credentials.login("abc", "jan@example.sk")
        credentials.logout()
        unsubscribe()
        credentials.login("xyz", "jan@example.sk")

        assert seen == ["abc", None]
