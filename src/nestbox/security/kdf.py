from typing import Tuple, Union

from nestbox.core.hashing import calculate_sha512


KEY_LENGTH = 32
IV_LENGTH = 16


def derive_material(secret: Union[str, bytes], length: int) -> bytes:
    """
    Reduce a secret of any length to ``length`` bytes.

    The bytes are the first ``length`` hex characters of the SHA-512 digest,
    not raw digest bytes. Existing ciphertexts depend on exactly this, so it
    must not be "improved".
    """
    return calculate_sha512(secret)[:length].encode("ascii")


def derive_key_and_iv(key: Union[str, bytes], iv: Union[str, bytes]) -> Tuple[bytes, bytes]:
    """Return the (32-byte key, 16-byte iv) pair used to build the cipher."""
    return derive_material(key, KEY_LENGTH), derive_material(iv, IV_LENGTH)
