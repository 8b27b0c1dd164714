"""Registry of supported symmetric cipher methods and cipher construction.

Methods are named the OpenSSL way (``<algorithm>-<key bits>-<mode>``), e.g.
``aes-256-cbc``. Every method takes a 16-byte IV. CBC methods use PKCS#7
padding; CTR is unpadded. Camellia comes from the
``cryptography.hazmat.decrepit`` namespace, where ``cryptography`` keeps
ciphers it no longer recommends.

Key material must match the method's key size exactly. Since the derived key
is always 32 bytes, only the 256-bit variants are usable with
:class:`nestbox.security.encryption.CryptoBox`; the others are listed so that
callers get a precise "invalid key length" error instead of "unknown method".
"""
from dataclasses import dataclass
from typing import Callable, Dict, List

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.decrepit.ciphers.algorithms import Camellia
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from nestbox.core.exceptions import CipherConfigurationError


IV_SIZE = 16


@dataclass(frozen=True)
class CipherMethod:
    name: str
    algorithm: Callable
    key_size: int
    mode: Callable
    padded: bool

    @property
    def block_size(self) -> int:
        # in bits, as expected by padding.PKCS7
        return 128

    def padder(self):
        return padding.PKCS7(self.block_size).padder()

    def unpadder(self):
        return padding.PKCS7(self.block_size).unpadder()


def _build_registry() -> Dict[str, CipherMethod]:
    registry = {}
    modes_by_name = {
        "cbc": (modes.CBC, True),
        "ctr": (modes.CTR, False),
    }
    for bits in (128, 192, 256):
        for mode_name, (mode, padded) in modes_by_name.items():
            name = f"aes-{bits}-{mode_name}"
            registry[name] = CipherMethod(name, algorithms.AES, bits // 8, mode, padded)
        name = f"camellia-{bits}-cbc"
        registry[name] = CipherMethod(name, Camellia, bits // 8, modes.CBC, True)
    return registry


METHODS = _build_registry()


def supported_methods() -> List[str]:
    return sorted(METHODS)


def get_method(method: str) -> CipherMethod:
    """Look up a cipher method by name (case-insensitive)."""
    if not isinstance(method, str):
        raise CipherConfigurationError(f"Cipher method must be a string, got {type(method).__name__}")
    try:
        return METHODS[method.lower()]
    except KeyError:
        raise CipherConfigurationError(f"Unsupported cipher method: {method!r}") from None


def build_cipher(method: str, key: bytes, iv: bytes) -> Cipher:
    """Return a ``Cipher`` for ``method`` after checking key and IV sizes."""
    info = get_method(method)
    if len(key) != info.key_size:
        raise CipherConfigurationError(
            f"Invalid key length for {info.name}: expected {info.key_size} bytes, got {len(key)}"
        )
    if len(iv) != IV_SIZE:
        raise CipherConfigurationError(
            f"Invalid initialization vector for {info.name}: expected {IV_SIZE} bytes, got {len(iv)}"
        )
    try:
        return Cipher(info.algorithm(key), info.mode(iv))
    except (UnsupportedAlgorithm, ValueError) as exc:
        raise CipherConfigurationError(f"Cannot build cipher {info.name}: {exc}") from exc
