"""nestbox: dotted-path access to nested data, string masking and payload encryption."""

from nestbox.core.exceptions import (
    NestboxError,
    InvalidJsonError,
    CipherConfigurationError,
    DecryptionError,
)
from nestbox.core.types import TypeTag, classify, is_iterable
from nestbox.core.paths import get, set, crawl, set_copy, crawl_copy, get_many, assign
from nestbox.core.strings import divide, truncate, mask, capitalize_first_letter
from nestbox.core.parsing import object_from_string
from nestbox.security import (
    CipherSpec,
    CryptoBox,
    encrypt,
    decrypt,
    decrypt_json,
    supported_methods,
)

__version__ = "0.1.0"

__all__ = [
    "NestboxError",
    "InvalidJsonError",
    "CipherConfigurationError",
    "DecryptionError",
    "TypeTag",
    "classify",
    "is_iterable",
    "get",
    "set",
    "crawl",
    "set_copy",
    "crawl_copy",
    "get_many",
    "assign",
    "divide",
    "truncate",
    "mask",
    "capitalize_first_letter",
    "object_from_string",
    "CipherSpec",
    "CryptoBox",
    "encrypt",
    "decrypt",
    "decrypt_json",
    "supported_methods",
]
