"""
Text utilities: sentences and words.
"""

import re
from typing import List

_SENTENCE_BOUNDARY = re.compile(r'(?<=[.?!])\s+(?=[a-z])', re.IGNORECASE)
_WHITESPACE = re.compile(r'\s+')


def split_into_sentences(text: str) -> List[str]:
    """
    Split text into sentences.

        >>> split_into_sentences('Fry me a Beaver. Fry me a Beaver! Fry me many Beavers... End')
        ['Fry me a Beaver.', 'Fry me a Beaver!', 'Fry me many Beavers...', 'End']
    """
    return _SENTENCE_BOUNDARY.split(text)


def split_into_words(text: str) -> List[str]:
    """Split text into words by whitespace."""
    return _WHITESPACE.split(text)


def extract_words(text: str) -> List[str]:
    """Like split_into_words() but an empty text has no words."""
    if text == '':
        return []
    return split_into_words(text)


def remove_word(text: str, word: str) -> str:
    """Remove whole-word occurrences of word from text."""
    if word == text:
        return ''

    quoted = re.escape(word)
    text = re.sub(r'^' + quoted + r'\W', '', text)
    text = re.sub(r'\W' + quoted + r'\W', ' ', text)
    text = re.sub(r'\W' + quoted + r'$', '', text)

    return text
