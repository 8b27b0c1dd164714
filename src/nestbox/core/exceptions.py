"""
Exceptions for the nestbox toolkit
This is placed such that there is a general error catcher
"""


class NestboxError(Exception):
    # general container for errors
    pass


class InvalidJsonError(NestboxError, ValueError):
    # raised when text that should hold a JSON object does not parse

    def __init__(self, text=None):
        super().__init__("Invalid Json")
        self.text = text


class CipherConfigurationError(NestboxError, ValueError):
    # raised when a cipher method is unknown or the key/iv material does not fit it
    pass


class DecryptionError(NestboxError):
    # raised when ciphertext cannot be decrypted under the given spec
    pass
