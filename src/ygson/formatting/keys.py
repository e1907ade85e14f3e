"""
Key transformations: casing and natural ordering.
"""

import re
from typing import List, Tuple

_TOKEN = re.compile(r'(\d+)|(.)', re.DOTALL)


def snake_case(key: str) -> str:
    """
    Convert a camelCase key to snake_case.

    A new word starts at every uppercase letter that follows a non-uppercase
    character, and at the last letter of an uppercase run that is followed by
    a lowercase letter, so acronyms stay together:

        myProperty    -> my_property
        myURLProperty -> my_url_property
        URLValue      -> url_value

    Empty keys pass through unchanged.
    """
    if not key:
        return key

    words: List[str] = []
    word_start = 0
    length = len(key)

    for i in range(1, length):
        current = key[i]
        if not current.isupper():
            continue
        previous = key[i - 1]
        if previous.isupper():
            # Acronym run ending here: the last capital opens the next word.
            starts_word = i + 1 < length and key[i + 1].islower()
        else:
            starts_word = previous != '_'
        if starts_word:
            words.append(key[word_start:i])
            word_start = i

    words.append(key[word_start:])
    return '_'.join(word.lower() for word in words)


def natural_sort_key(key: str) -> Tuple:
    """
    Sort key for natural, case-insensitive ordering.

    Characters compare case-folded, one at a time. A digit run compares as
    a single '0' character weighted by its numeric value, so "item2" sorts
    before "item10" while "a-" and "a.b" still sort before "a1". The
    original key breaks ties so the order is total.
    """
    parts = []
    for digits, char in _TOKEN.findall(key):
        if digits:
            parts.append(('0', int(digits)))
        else:
            parts.append((char.casefold(), 0))
    return (tuple(parts), key)
