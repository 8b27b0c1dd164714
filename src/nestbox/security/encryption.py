"""
Symmetric encryption of structured payloads.

A payload dict is stamped with a ``Timestamp``, serialized to compact JSON,
encrypted, rendered as lowercase hex and finally base64-encoded, so the
output is plain ASCII text safe to embed anywhere. Decryption reverses the
chain and returns the JSON text; parsing it is up to the caller (see
:func:`decrypt_json`).

One key idea to retain:
- A :class:`CryptoBox` holds live cipher contexts and serves exactly one
  ``encrypt`` and one ``decrypt`` call. Prefer the module-level
  :func:`encrypt` / :func:`decrypt`, which build a fresh box every time.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Union

from cryptography.exceptions import UnsupportedAlgorithm

from nestbox.core.exceptions import CipherConfigurationError, DecryptionError
from nestbox.core.parsing import object_from_string
from .crypto import build_cipher, get_method
from .kdf import derive_key_and_iv

logger = logging.getLogger(__name__)

TIMESTAMP_FIELD = "Timestamp"


@dataclass(frozen=True)
class CipherSpec:
    """Caller-supplied cipher settings: method name plus key and IV secrets of any length."""

    method: str
    key: Union[str, bytes] = field(repr=False)
    iv: Union[str, bytes] = field(repr=False)

    @classmethod
    def from_dict(cls, data: Mapping) -> "CipherSpec":
        try:
            return cls(method=data["method"], key=data["key"], iv=data["iv"])
        except KeyError as exc:
            raise CipherConfigurationError(f"Cipher spec is missing {exc.args[0]!r}") from exc

    @classmethod
    def coerce(cls, spec: Union["CipherSpec", Mapping]) -> "CipherSpec":
        if isinstance(spec, cls):
            return spec
        if isinstance(spec, Mapping):
            return cls.from_dict(spec)
        raise CipherConfigurationError(f"Expected a CipherSpec or mapping, got {type(spec).__name__}")


def current_timestamp() -> str:
    # same shape as a JavaScript Date in JSON: 2024-01-31T12:00:00.000Z
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class CryptoBox:
    """
    Single-use encrypt/decrypt wrapper around one cipher configuration.

    The key and IV are reduced to 32 and 16 bytes via
    :func:`nestbox.security.kdf.derive_key_and_iv`, so secrets of any
    length are accepted. Unknown methods and mismatched key sizes raise
    :class:`CipherConfigurationError` here, before any data is touched.

    Each direction may be used once; a second ``encrypt`` or ``decrypt``
    on the same instance raises ``RuntimeError``.
    """

    def __init__(self, spec: Union[CipherSpec, Mapping]):
        self.spec = CipherSpec.coerce(spec)
        for name in ("key", "iv"):
            if not isinstance(getattr(self.spec, name), (str, bytes)):
                raise CipherConfigurationError(f"Cipher {name} must be str or bytes")

        self._method = get_method(self.spec.method)
        enc_key, enc_iv = derive_key_and_iv(self.spec.key, self.spec.iv)
        cipher = build_cipher(self._method.name, enc_key, enc_iv)
        try:
            self._encryptor = cipher.encryptor()
            self._decryptor = cipher.decryptor()
        except UnsupportedAlgorithm as exc:
            raise CipherConfigurationError(
                f"Cipher {self._method.name} is not available in this OpenSSL build"
            ) from exc

        self._encrypted = False
        self._decrypted = False
        logger.debug("CryptoBox ready (method=%s)", self._method.name)

    @property
    def method(self) -> str:
        return self._method.name

    def _consume(self, direction: str) -> None:
        attr = f"_{direction}ed"
        if getattr(self, attr):
            logger.warning("CryptoBox reused for %s; cipher state is already final", direction)
            raise RuntimeError(
                f"CryptoBox already used to {direction}; construct a fresh instance per call"
            )
        setattr(self, attr, True)

    def encrypt(self, payload: Mapping) -> str:
        """
        Stamp ``payload`` with the current time and encrypt it.

        Returns base64 text wrapping the hex-encoded ciphertext. An existing
        ``Timestamp`` key in the payload is overwritten.
        """
        self._consume("encrypt")
        envelope: Dict[str, Any] = {**payload, TIMESTAMP_FIELD: current_timestamp()}
        plaintext = json.dumps(
            envelope, separators=(",", ":"), ensure_ascii=False, default=_json_default
        ).encode("utf-8")

        if self._method.padded:
            padder = self._method.padder()
            plaintext = padder.update(plaintext) + padder.finalize()
        ciphertext = self._encryptor.update(plaintext) + self._encryptor.finalize()

        encoded = base64.b64encode(ciphertext.hex().encode("ascii")).decode("ascii")
        logger.debug("Encrypted %d plaintext bytes with %s", len(plaintext), self._method.name)
        return encoded

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt text produced by :meth:`encrypt` and return the JSON text.

        Raises :class:`DecryptionError` for malformed input, for data
        encrypted under a different method, key or IV, and for plaintext
        that is not the JSON envelope written by :meth:`encrypt`.
        """
        self._consume("decrypt")
        try:
            hex_text = base64.b64decode(ciphertext, validate=True).decode("utf-8")
            raw = bytes.fromhex(hex_text)
            plaintext = self._decryptor.update(raw) + self._decryptor.finalize()
            if self._method.padded:
                unpadder = self._method.unpadder()
                plaintext = unpadder.update(plaintext) + unpadder.finalize()
            text = plaintext.decode("utf-8")
            # a wrong CBC iv only garbles the first block, so check the envelope parses
            json.loads(text)
        except (binascii.Error, TypeError, ValueError) as exc:
            # ValueError also covers bad padding, partial blocks, UnicodeDecodeError and JSONDecodeError
            raise DecryptionError(f"Unable to decrypt data with {self._method.name}") from exc

        logger.debug("Decrypted %d bytes with %s", len(raw), self._method.name)
        return text


def encrypt(payload: Mapping, spec: Union[CipherSpec, Mapping]) -> str:
    """Encrypt ``payload`` with a fresh :class:`CryptoBox`."""
    return CryptoBox(spec).encrypt(payload)


def decrypt(ciphertext: str, spec: Union[CipherSpec, Mapping]) -> str:
    """Decrypt ``ciphertext`` with a fresh :class:`CryptoBox`."""
    return CryptoBox(spec).decrypt(ciphertext)


def decrypt_json(
    ciphertext: str, spec: Union[CipherSpec, Mapping], suppress: bool = False
) -> Dict[str, Any]:
    """
    Decrypt ``ciphertext`` and parse the result into a dict.

    Malformed JSON raises :class:`nestbox.core.exceptions.InvalidJsonError`
    unless ``suppress`` is set, in which case ``{}`` is returned.
    """
    return object_from_string(decrypt(ciphertext, spec), suppress=suppress)
