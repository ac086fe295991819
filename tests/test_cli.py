"""CLI tests using the typer runner and a mocked document service."""

import json
from unittest.mock import patch

import httpx
import pytest
from typer.testing import CliRunner

from conftest import FakeDocumentService, json_response, page_payload
from dokumentovac.main import app
from dokumentovac.services.credentials import CredentialProvider

runner = CliRunner()


@pytest.fixture
def logged_in():
    CredentialProvider.from_session().login("cli-token", "jan@example.sk")


@pytest.fixture
def service():
    """Route every DocumentServiceClient the commands create to a fake service."""
    fake = FakeDocumentService()
    with patch("dokumentovac.commands.documents.DocumentServiceClient", side_effect=lambda *a, **k: fake.client()):
        yield fake


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Usage:" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert "dokumentovac version" in result.stdout

    def test_invalid_env_is_reported(self, monkeypatch):
        monkeypatch.setenv("DOKUMENTOVAC_LOG_LEVEL", "LOUD")
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 1
        assert "LOUD" in result.stdout

    def test_config_lists_variables(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "DOKUMENTOVAC_API_URL" in result.stdout


class TestSessionCommands:
    """Tests for login, logout and whoami."""

    def test_login_and_whoami(self):
        result = runner.invoke(app, ["login", "--email", "jan@example.sk", "--token", "abc"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["whoami"])
        assert result.exit_code == 0
        assert "jan@example.sk" in result.stdout

    def test_login_prompts_for_token(self):
        result = runner.invoke(app, ["login", "--email", "jan@example.sk"], input="abc\n")
        assert result.exit_code == 0
        assert CredentialProvider.from_session().token == "abc"

    def test_whoami_without_session(self):
        result = runner.invoke(app, ["whoami"])
        assert result.exit_code == 1

    def test_logout(self, logged_in):
        result = runner.invoke(app, ["logout"])
        assert result.exit_code == 0
        assert CredentialProvider.from_session().is_authenticated is False


class TestDocumentCommands:
    """Tests for the document commands."""

    def test_list_requires_login(self, service):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "Musíte byť prihlásený" in result.stdout
        assert service.requests == []

    def test_list_table(self, service, logged_in):
        service.handler = lambda request: json_response(page_payload([1, 2], 12))
        result = runner.invoke(app, ["list", "--search", " zmluva ", "--tag", "zmluvy"])

        assert result.exit_code == 0
        request = service.requests[0]
        assert dict(request.url.params) == {
            "page": "1",
            "limit": "10",
            "search": "zmluva",
            "tag": "zmluvy",
        }
        assert request.headers["Authorization"] == "Bearer cli-token"
        assert "Dokument 1" in result.stdout
        assert "Strana 1 z 2" in result.stdout

    def test_list_json(self, service, logged_in):
        service.handler = lambda request: json_response(page_payload([4], 1))
        result = runner.invoke(app, ["list", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total"] == 1
        assert data["documents"][0]["file_url"] == "/uploads/doc4.pdf"

    def test_list_service_error_message(self, service, logged_in):
        service.handler = lambda request: json_response({"message": "Neplatný token"}, 401)
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "Neplatný token" in result.stdout

    def test_tags(self, service, logged_in):
        service.handler = lambda request: json_response(["faktura", "zmluvy"])
        result = runner.invoke(app, ["tags"])
        assert result.exit_code == 0
        assert "faktura" in result.stdout

    def test_create_validates_before_request(self, service, logged_in, tmp_path):
        result = runner.invoke(app, ["create", "--name", " ", "--file", str(tmp_path / "x.pdf")])
        assert result.exit_code == 1
        assert "Prosím zadajte názov dokumentu" in result.stdout
        assert service.requests == []

    def test_create(self, service, logged_in, tmp_path):
        path = tmp_path / "x.pdf"
        path.write_bytes(b"pdf")
        service.handler = lambda request: json_response({"id": 42}, 201)

        result = runner.invoke(app, ["create", "--name", "Faktúra", "--file", str(path), "--tag", "faktura"])

        assert result.exit_code == 0
        assert service.requests[0].method == "POST"
        assert "ID: 42" in result.stdout

    def test_edit(self, service, logged_in):
        service.handler = lambda request: json_response({"id": 3})
        result = runner.invoke(app, ["edit", "3", "--name", "Nový názov"])
        assert result.exit_code == 0
        assert service.requests[0].method == "PATCH"
        assert service.requests[0].url.path == "/documents/3"

    def test_delete_with_yes(self, service, logged_in):
        service.handler = lambda request: httpx.Response(204)
        result = runner.invoke(app, ["delete", "5", "--yes"])
        assert result.exit_code == 0
        assert service.requests[0].method == "DELETE"

    def test_delete_declined(self, service, logged_in):
        with patch("dokumentovac.commands.documents.is_non_interactive", return_value=False):
            result = runner.invoke(app, ["delete", "5"], input="n\n")
        assert result.exit_code == 0
        assert service.requests == []

    def test_delete_refuses_non_interactive(self, service, logged_in):
        with patch("dokumentovac.commands.documents.is_non_interactive", return_value=True):
            result = runner.invoke(app, ["delete", "5"])
        assert result.exit_code == 1
        assert service.requests == []

    def test_download(self, service, logged_in, tmp_path):
        service.handler = lambda request: httpx.Response(200, content=b"file-bytes")
        result = runner.invoke(app, ["download", "7", "--name", "a.pdf", "--dir", str(tmp_path)])

        assert result.exit_code == 0
        assert (tmp_path / "a.pdf").read_bytes() == b"file-bytes"
