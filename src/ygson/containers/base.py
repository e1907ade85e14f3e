"""
Shared container interface and coding path helpers.
"""

import enum
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from ..errors import InvalidKeyError
from ..model.json_value import JSONValue


class DuplicateKeyPolicy(enum.Enum):
    """What a keyed container does when the same key is written twice."""

    PRESERVE = 'preserve'
    OVERWRITE = 'overwrite'
    REJECT = 'reject'


class IndexKey:
    """Positional locator of an element inside an unkeyed container."""

    __slots__ = ('index',)

    def __init__(self, index: int):
        self.index = index

    @property
    def string_value(self) -> str:
        return str(self.index)

    def __eq__(self, other) -> bool:
        return isinstance(other, IndexKey) and other.index == self.index

    def __hash__(self) -> int:
        return hash(('index', self.index))

    def __repr__(self) -> str:
        return f"IndexKey({self.index})"


def key_text(key) -> str:
    """
    Convert a key to its text form.

    Accepts strings, integers, enum members (through their value) and any
    object exposing a ``string_value`` attribute.
    """
    if isinstance(key, str):
        return key
    if isinstance(key, enum.Enum):
        return key_text(key.value)
    if isinstance(key, bool):
        raise InvalidKeyError(key, "booleans are not valid keys")
    if isinstance(key, int):
        return str(key)
    string_value = getattr(key, 'string_value', None)
    if isinstance(string_value, str):
        return string_value
    raise InvalidKeyError(key, f"cannot convert {type(key).__name__} to text")


def format_coding_path(coding_path) -> str:
    """
    Render a coding path for diagnostics, e.g. ``$.users[2].name``.
    """
    parts = ['$']
    for component in coding_path:
        if isinstance(component, IndexKey):
            parts.append(f"[{component.index}]")
        else:
            parts.append(f".{component}")
    return ''.join(parts)


class EncodingContainer(ABC):
    """
    Common behaviour of the single value, keyed and unkeyed containers.

    A container is owned by exactly one parent and reduces to a JSONValue on
    demand. Reduction never mutates the container, so reading the value twice
    yields structurally equal results.
    """

    kind = 'abstract'

    def __init__(
        self,
        coding_path: Optional[List] = None,
        user_info: Optional[dict] = None,
        duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.PRESERVE,
        describe: Optional[Callable] = None,
    ):
        self.coding_path = list(coding_path or [])
        self.user_info = user_info if user_info is not None else {}
        self.duplicate_keys = duplicate_keys
        self.describe = describe

    def _child_options(self) -> dict:
        return {
            'user_info': self.user_info,
            'duplicate_keys': self.duplicate_keys,
            'describe': self.describe,
        }

    @abstractmethod
    def json_value(self) -> JSONValue:
        """Reduce this container (and its children) to a JSONValue."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={format_coding_path(self.coding_path)})"
