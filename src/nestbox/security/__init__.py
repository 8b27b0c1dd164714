"""Security helpers: key/IV derivation and payload encryption for nestbox.

This package provides:
- SHA-512 based reduction of caller secrets to fixed-size key/IV material
- a registry of OpenSSL-named symmetric cipher methods
- CryptoBox, a single-use wrapper that encrypts timestamped JSON payloads

Nothing here stores keys; every call receives its CipherSpec from the caller.
"""

from .kdf import derive_material, derive_key_and_iv
from .crypto import supported_methods, get_method, build_cipher
from .encryption import CipherSpec, CryptoBox, encrypt, decrypt, decrypt_json

__all__ = [
    "derive_material",
    "derive_key_and_iv",
    "supported_methods",
    "get_method",
    "build_cipher",
    "CipherSpec",
    "CryptoBox",
    "encrypt",
    "decrypt",
    "decrypt_json",
]
