"""Unit tests for the nestbox command line (Frontend)."""

import io
import json

import pytest

from nestbox.frontend.cli import app
from nestbox.frontend.cli.context import ENV_IV, ENV_KEY, ENV_METHOD


# --- Fixtures ---

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (ENV_METHOD, ENV_KEY, ENV_IV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def stdin(monkeypatch):
    """Return a setter that replaces sys.stdin with the given text."""
    def _set(text):
        monkeypatch.setattr(app.sys, "stdin", io.StringIO(text))
    return _set


# --- get / set ---

def test_get_reads_stdin(stdin, capsys):
    stdin('{"user": {"name": "ada"}}')
    assert app.main(["get", "user.name"]) == 0
    assert capsys.readouterr().out == "ada\n"


def test_get_prints_json_for_composites(capsys):
    assert app.main(["get", "a", "--data", '{"a": {"b": [1, 2]}}']) == 0
    assert json.loads(capsys.readouterr().out) == {"b": [1, 2]}


def test_get_default(capsys):
    assert app.main(["get", "a.missing", "--data", "{}", "--default", "0"]) == 0
    assert capsys.readouterr().out.strip() == "0"


def test_get_missing_without_default_prints_null(capsys):
    app.main(["get", "x", "--data", "{}"])
    assert capsys.readouterr().out.strip() == "null"


def test_set_builds_levels(capsys):
    assert app.main(["set", "server.port", "8080", "--data", "{}"]) == 0
    assert json.loads(capsys.readouterr().out) == {"server": {"port": 8080}}


def test_set_plain_text_value(stdin, capsys):
    stdin("")
    app.main(["set", "name", "ada lovelace"])
    assert json.loads(capsys.readouterr().out) == {"name": "ada lovelace"}


def test_input_with_json_tail(capsys):
    app.main(["get", "id", "--data", 'event payload={"id": "abc"}'])
    assert capsys.readouterr().out.strip() == "abc"


def test_invalid_json_input_is_reported(capsys):
    assert app.main(["get", "a", "--data", "{nope}"]) == 1
    assert "Invalid Json" in capsys.readouterr().err


# --- encrypt / decrypt ---

def test_encrypt_then_decrypt(capsys):
    assert app.main(["encrypt", "--key", "k", "--iv", "v", "--data", '{"id": 7}']) == 0
    ciphertext = capsys.readouterr().out.strip()

    assert app.main(["decrypt", "--key", "k", "--iv", "v", "--data", ciphertext]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["id"] == 7
    assert "Timestamp" in result


def test_decrypt_json_pretty_prints(monkeypatch, stdin, capsys):
    monkeypatch.setenv(ENV_KEY, "k")
    monkeypatch.setenv(ENV_IV, "v")
    app.main(["encrypt", "--data", '{"id": 7}'])
    ciphertext = capsys.readouterr().out

    stdin(ciphertext)
    assert app.main(["decrypt", "--json"]) == 0
    out = capsys.readouterr().out
    assert "\n  " in out
    assert json.loads(out)["id"] == 7


def test_decrypt_with_wrong_key_fails(capsys):
    app.main(["encrypt", "--key", "k", "--iv", "v", "--data", '{"id": 7}'])
    ciphertext = capsys.readouterr().out.strip()

    assert app.main(["decrypt", "--key", "other", "--iv", "v", "--data", ciphertext]) == 1
    assert "Unable to decrypt" in capsys.readouterr().err


def test_encrypt_without_key_fails(capsys):
    assert app.main(["encrypt", "--data", "{}"]) == 1
    assert "Missing cipher key" in capsys.readouterr().err


def test_encrypt_unknown_method_fails(capsys):
    assert app.main(["encrypt", "--method", "rot13", "--key", "k", "--iv", "v", "--data", "{}"]) == 1
    assert "Unsupported cipher method" in capsys.readouterr().err


def test_encrypt_rejects_non_object():
    with pytest.raises(SystemExit):
        app.main(["encrypt", "--key", "k", "--iv", "v", "--data", "[1, 2]"])


# --- obfuscation / misc ---

def test_mask(capsys):
    assert app.main(["mask", "4111111111111111", "--max-length", "4"]) == 0
    assert capsys.readouterr().out.strip() == "4111************"


def test_truncate(capsys):
    assert app.main(["truncate", "abcdef", "--max-length", "1", "--blocks", "2", "--ellipsis", ".."]) == 0
    assert capsys.readouterr().out.strip() == "a..d.."


def test_methods(capsys):
    assert app.main(["methods"]) == 0
    assert "aes-256-cbc" in capsys.readouterr().out.split()


def test_command_is_required():
    with pytest.raises(SystemExit):
        app.main([])
