import json

import pytest

from steemconnect import cli


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    for key in ("STEEMCONNECT_CLIENT_ID", "STEEMCONNECT_CLIENT_SECRET"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("STEEMCONNECT_CLIENT_ID", "cli.app")
    monkeypatch.setenv("STEEMCONNECT_CLIENT_SECRET", "cli-secret")
    monkeypatch.setenv("STEEMCONNECT_RETURN_URL", "https://cli.app/callback")


def test_missing_credentials_exit_2(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["authorize-url"])
    assert exc.value.code == 2
    assert "STEEMCONNECT_CLIENT_ID" in capsys.readouterr().err


def test_authorize_url(env, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["authorize-url", "--state", "abc", "--scopes", "login,vote"])
    assert exc.value.code == 0

    out = capsys.readouterr()
    url = out.out.strip()
    assert url.startswith("https://v2.steemconnect.com/oauth2/authorize?")
    assert "state=abc" in url
    assert "client_id=cli.app" in url
    assert "state: abc" in out.err


def test_exchange_prints_token(env, capsys, monkeypatch, transport, token_data):
    monkeypatch.setattr(
        cli, "Provider", _provider_with(transport), raising=True
    )
    transport.queue(token_data)

    with pytest.raises(SystemExit) as exc:
        cli.main(["exchange", "mock-code"])
    assert exc.value.code == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["access_token"] == "mock-access-token"


def test_provider_error_exit_1(env, capsys, monkeypatch, transport):
    monkeypatch.setattr(cli, "Provider", _provider_with(transport))
    transport.queue({"error": "invalid_grant"})

    with pytest.raises(SystemExit) as exc:
        cli.main(["refresh", "stale-token"])
    assert exc.value.code == 1
    assert "invalid_grant" in capsys.readouterr().err


def test_me_prints_account(env, capsys, monkeypatch, transport, account_data):
    monkeypatch.setattr(cli, "Provider", _provider_with(transport))
    transport.queue(account_data)

    with pytest.raises(SystemExit) as exc:
        cli.main(["me", "mock-access-token"])
    assert exc.value.code == 0
    assert json.loads(capsys.readouterr().out) == {"name": "dummy-name", "foo": "bar"}


def _provider_with(transport):
    from steemconnect.provider import Provider

    def factory(config):
        return Provider(config, session_factory=transport.session_factory)

    return factory


def test_exchange_without_code_exit_1(env, capsys, monkeypatch, transport):
    monkeypatch.setattr(cli, "Provider", _provider_with(transport))

    with pytest.raises(SystemExit) as exc:
        cli.main(["exchange", ""])
    assert exc.value.code == 1
    assert "No authorization code" in capsys.readouterr().err
    assert transport.requests == []


def test_refresh_without_token_exit_1(env, capsys, monkeypatch, transport):
    monkeypatch.setattr(cli, "Provider", _provider_with(transport))

    with pytest.raises(SystemExit) as exc:
        cli.main(["refresh", ""])
    assert exc.value.code == 1
    assert "No refresh token" in capsys.readouterr().err
    assert transport.requests == []
