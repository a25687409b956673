"""
String utilities for Gears.
Searching, case conversion, word extraction and simple symmetric encryption.
"""

import base64
import binascii
import hashlib
import os
import re
from typing import Iterable, List, Optional, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..errors import DecryptionError

NONCE_SIZE = 12

_WORD_EDGE_PATTERN = re.compile(r'^\W+|\W+$')
_CAMEL_PATTERN = re.compile(r'(.)([A-Z])')


def _find(string: str, needle: str, case_sensitive: bool) -> int:
    if case_sensitive:
        return string.find(needle)
    return string.lower().find(needle.lower())


def str_before(string: str, before: str, case_sensitive: bool = True) -> Optional[str]:
    """
    Return the part of string before the first occurrence of the needle.
    Returns None if the needle is not found.
    """
    pos = _find(string, before, case_sensitive)
    if pos == -1:
        return None

    return string[:pos]


def str_after(string: str, after: str, case_sensitive: bool = True) -> Optional[str]:
    """
    Return the part of string after the first occurrence of the needle.
    Returns None if the needle is not found.
    """
    pos = _find(string, after, case_sensitive)
    if pos == -1:
        return None

    return string[pos + len(after):]


def _needles(needles: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(needles, str):
        return [needles]
    return list(needles)


def starts_with(haystack: str, needles: Union[str, Iterable[str]]) -> bool:
    """Determine if a string starts with any of the given non-empty substrings."""
    return any(needle != '' and haystack.startswith(needle) for needle in _needles(needles))


def ends_with(haystack: str, needles: Union[str, Iterable[str]]) -> bool:
    """Determine if a string ends with any of the given non-empty substrings."""
    return any(needle != '' and haystack.endswith(needle) for needle in _needles(needles))


def contains(haystack: str, needle: str) -> bool:
    """Determine if a string contains a given substring."""
    return needle in haystack


def words(text: str) -> List[str]:
    """
    Extract words from a text.

    Leading and trailing punctuation of every word is stripped, tokens
    without word characters are dropped, inner punctuation is kept:

        >>> words('R.O.L.A.N.D. - TB303')
        ['R.O.L.A.N.D', 'TB303']
    """
    result = []
    for token in text.split():
        word = _WORD_EDGE_PATTERN.sub('', token)
        if word:
            result.append(word)

    return result


def snake_to_camel(value: str) -> str:
    """Take a string_like_this and return a StringLikeThis."""
    return ''.join(part[:1].upper() + part[1:] for part in value.replace('_', ' ').split(' '))


def camel_to_snake(value: str) -> str:
    """Take a StringLikeThis and return a string_like_this."""
    value = _CAMEL_PATTERN.sub(lambda m: m.group(1) + '_' + m.group(2).lower(), value)
    return value[:1].lower() + value[1:]


def _derive_key(secret: str) -> bytes:
    return hashlib.sha256(secret.encode('utf-8')).digest()


def encrypt(string: str, secret: str) -> str:
    """
    Simple symmetric encryption of a string.

    AES-256-GCM with a key derived from the secret; a random nonce is
    prepended to the ciphertext and the result is URL-safe base64 encoded.
    """
    nonce = os.urandom(NONCE_SIZE)
    ciphertext = AESGCM(_derive_key(secret)).encrypt(nonce, string.encode('utf-8'), None)

    return base64.urlsafe_b64encode(nonce + ciphertext).decode('ascii')


def decrypt(encrypted: str, secret: str) -> str:
    """
    Decrypt a string produced by encrypt().

    Raises DecryptionError if the data is malformed, was tampered with
    or the secret does not match.
    """
    try:
        raw = base64.urlsafe_b64decode(encrypted.encode('ascii'))
    except (binascii.Error, ValueError) as e:
        raise DecryptionError(f"Invalid encrypted data: {e}", cause=e)

    if len(raw) <= NONCE_SIZE:
        raise DecryptionError("Invalid encrypted data: too short")

    nonce, ciphertext = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
    try:
        plaintext = AESGCM(_derive_key(secret)).decrypt(nonce, ciphertext, None)
    except InvalidTag as e:
        raise DecryptionError("Unable to decrypt: wrong secret or corrupted data", cause=e)

    return plaintext.decode('utf-8')
