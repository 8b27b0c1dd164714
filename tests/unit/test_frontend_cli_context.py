"""Unit tests for the CLI cipher spec builder."""

import pytest

from nestbox.core.exceptions import CipherConfigurationError
from nestbox.frontend.cli.context import (
    DEFAULT_METHOD,
    ENV_IV,
    ENV_KEY,
    ENV_METHOD,
    build_cipher_spec,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without cipher settings in the environment."""
    for name in (ENV_METHOD, ENV_KEY, ENV_IV):
        monkeypatch.delenv(name, raising=False)


def test_explicit_values_win(monkeypatch):
    monkeypatch.setenv(ENV_KEY, "env-key")
    spec = build_cipher_spec("aes-256-ctr", "arg-key", "arg-iv")
    assert spec.method == "aes-256-ctr"
    assert spec.key == "arg-key"
    assert spec.iv == "arg-iv"


def test_environment_fallback(monkeypatch):
    monkeypatch.setenv(ENV_METHOD, "aes-256-ctr")
    monkeypatch.setenv(ENV_KEY, "env-key")
    monkeypatch.setenv(ENV_IV, "env-iv")
    spec = build_cipher_spec()
    assert (spec.method, spec.key, spec.iv) == ("aes-256-ctr", "env-key", "env-iv")


def test_default_method():
    assert build_cipher_spec(key="k", iv="v").method == DEFAULT_METHOD == "aes-256-cbc"


def test_empty_key_is_allowed():
    """An empty secret is still a secret; only absence is an error."""
    assert build_cipher_spec(key="", iv="").key == ""


def test_missing_key_and_iv():
    with pytest.raises(CipherConfigurationError, match="key and iv"):
        build_cipher_spec()


def test_missing_iv_names_env_var(monkeypatch):
    monkeypatch.setenv(ENV_KEY, "k")
    with pytest.raises(CipherConfigurationError, match=ENV_IV):
        build_cipher_spec()
