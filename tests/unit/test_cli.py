import json
from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from keyhook import publisher as publisher_module
from keyhook.cli import cli

EVENTS = [
    {
        "type": "LOGIN",
        "realmId": "master",
        "userId": "u1",
        "details": {"reason": "first login"},
    },
    {"operationType": "DELETE", "resourcePath": "users/abc"},
]
USERS = [{"id": "u1", "email": "alice@example.com", "groups": ["admins"]}]


def _write(tmp_path: Path, name: str, data: object) -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_describe_command(tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["describe", str(_write(tmp_path, "e.json", EVENTS))])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].startswith("type=LOGIN, realmId=master")
    assert lines[0].endswith("reason='first login'")
    assert lines[1].startswith("operationType=DELETE")


def test_render_command_with_users(tmp_path: Path) -> None:
    events = _write(tmp_path, "e.json", EVENTS)
    users = _write(tmp_path, "u.json", USERS)
    result = CliRunner().invoke(cli, ["render", str(events), "--users", str(users)])
    assert result.exit_code == 0
    first, second = (json.loads(line) for line in result.output.splitlines())
    assert first["userGroups"] == ["admins"]
    assert first["userAttributes"] == {"userId": "u1", "email": "alice@example.com"}
    assert second == {"type": "ADMIN_EVENT", "operationType": "DELETE", "resourcePath": "users/abc"}


def test_render_command_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{nope", encoding="utf-8")
    result = CliRunner().invoke(cli, ["render", str(path)])
    assert result.exit_code != 0
    assert "invalid JSON" in result.output


def test_send_command_reports_delivery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    received: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(json.loads(request.content))
        return httpx.Response(200)

    real_client = httpx.Client

    def client_factory(**kwargs: object) -> httpx.Client:
        kwargs["transport"] = httpx.MockTransport(handler)
        return real_client(**kwargs)  # type: ignore[arg-type]

    monkeypatch.setattr(publisher_module.httpx, "Client", client_factory)
    monkeypatch.setenv("KEYCLOAK_WEBHOOKS_BASE_URL", "https://hooks.example.com")
    monkeypatch.setenv("KEYCLOAK_WEBHOOKS_TAKEN", "LOGIN")

    result = CliRunner().invoke(cli, ["send", str(_write(tmp_path, "e.json", EVENTS))])
    assert result.exit_code == 0, result.output
    assert "delivered: 1" in result.output
    assert "dropped: 1" in result.output
    assert [body["type"] for body in received] == ["LOGIN"]


def test_check_config_masks_credential(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KEYCLOAK_WEBHOOKS_BASE_URL", "https://hooks.example.com")
    monkeypatch.setenv("KEYCLOAK_WEBHOOKS_API_KEY", "super-secret")
    result = CliRunner().invoke(cli, ["check-config"])
    assert result.exit_code == 0
    assert "super-secret" not in result.output
    assert "api key: set" in result.output
    assert "allow-list: (all)" in result.output


def test_check_config_fails_in_prod_without_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    result = CliRunner().invoke(cli, ["check-config"])
    assert result.exit_code == 1
    assert "KEYCLOAK_WEBHOOKS_BASE_URL" in result.output
