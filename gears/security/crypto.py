"""
Symmetric encryption with the application secret.
"""

from typing import Any

from ..errors import InvalidArgumentError
from ..util import strings


class Crypto:
    """
    Encrypts and decrypts strings with a secret key.

        crypto = Crypto.from_config(config)
        token = crypto.encrypt('order:42')
        crypto.decrypt(token)  # 'order:42'

    See gears.util.strings.encrypt() for the algorithm.
    """

    def __init__(self, secret: str):
        if not secret:
            raise InvalidArgumentError("Crypto requires a non-empty secret")
        self._secret = secret

    @classmethod
    def from_config(cls, config: Any) -> "Crypto":
        """Create a Crypto using config.secret as the key."""
        return cls(config.secret)

    def encrypt(self, string: str) -> str:
        """Encrypt a string; the result is URL-safe base64."""
        return strings.encrypt(string, self._secret)

    def decrypt(self, encrypted: str) -> str:
        """Decrypt a string produced by encrypt(); raises DecryptionError on failure."""
        return strings.decrypt(encrypted, self._secret)
