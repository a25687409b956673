"""
File type detection.

Types are guessed from the file name with the mimetypes registry; file
contents are never read.
"""

import mimetypes
from typing import Optional


def guess_mime(filename: str) -> Optional[str]:
    """Guess the mime type of a file, None if unknown."""
    mime, _ = mimetypes.guess_type(filename, strict=False)
    return mime


def guess_extension(filename: str) -> Optional[str]:
    """
    Guess the canonical extension (without the dot) for a file, None if unknown.

        >>> guess_extension('photo.jpeg')
        'jpg'
    """
    mime = guess_mime(filename)
    if mime is None:
        return None

    extension = mimetypes.guess_extension(mime, strict=False)
    return extension.lstrip('.') if extension else None
