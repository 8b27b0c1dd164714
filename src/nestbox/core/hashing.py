""" Utility for hashing operations. """

import hashlib
from typing import Union


def _as_bytes(data: Union[str, bytes]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def calculate_sha512(data: Union[str, bytes]) -> str:

    # Calculates the hex SHA-512 digest of text (UTF-8 encoded) or bytes.

    return hashlib.sha512(_as_bytes(data)).hexdigest()
