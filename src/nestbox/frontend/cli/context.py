"""Small helper to resolve cipher settings for the command line."""

from __future__ import annotations

import os
from typing import Optional

from nestbox.core.exceptions import CipherConfigurationError
from nestbox.security.encryption import CipherSpec


DEFAULT_METHOD = "aes-256-cbc"

ENV_METHOD = "NESTBOX_CIPHER_METHOD"
ENV_KEY = "NESTBOX_CIPHER_KEY"
ENV_IV = "NESTBOX_CIPHER_IV"


def build_cipher_spec(
    method: Optional[str] = None,
    key: Optional[str] = None,
    iv: Optional[str] = None,
) -> CipherSpec:
    """
    Build a CipherSpec from explicit values, falling back to the environment.

    Lookup order for every field is the argument, then its environment
    variable (``NESTBOX_CIPHER_METHOD``, ``NESTBOX_CIPHER_KEY``,
    ``NESTBOX_CIPHER_IV``). The method defaults to ``aes-256-cbc``; key and
    IV have no default and a missing one raises
    :class:`CipherConfigurationError`.
    """
    method = method or os.getenv(ENV_METHOD) or DEFAULT_METHOD
    key = key if key is not None else os.getenv(ENV_KEY)
    iv = iv if iv is not None else os.getenv(ENV_IV)

    missing = [name for name, value in (("key", key), ("iv", iv)) if value is None]
    if missing:
        raise CipherConfigurationError(
            f"Missing cipher {' and '.join(missing)}; pass --{missing[0]} or set "
            f"{ENV_KEY if missing[0] == 'key' else ENV_IV}"
        )
    return CipherSpec(method=method, key=key, iv=iv)
