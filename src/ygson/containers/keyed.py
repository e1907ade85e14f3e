"""
Keyed container: an ordered sequence of (key, child container) pairs.
"""

from typing import List, Tuple

from ..errors import DuplicateKeyError
from ..model.json_value import JSONValue
from .base import DuplicateKeyPolicy, EncodingContainer, key_text
from .single_value import SingleValueContainer
from .unkeyed import UnkeyedContainer


class KeyedContainer(EncodingContainer):
    """
    Container for record-like values.

    Children are created first and populated later by the caller; they only
    need to be complete before json_value() is read. Repeated keys follow the
    container's DuplicateKeyPolicy:

    - PRESERVE: both entries are kept, in write order
    - OVERWRITE: the new child replaces the old one at the old position
    - REJECT: DuplicateKeyError is raised
    """

    kind = 'keyed'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._entries: List[Tuple[str, EncodingContainer]] = []

    def _attach(self, key, factory) -> EncodingContainer:
        text = key_text(key)
        child = factory(
            coding_path=self.coding_path + [text],
            **self._child_options(),
        )

        if self.duplicate_keys is not DuplicateKeyPolicy.PRESERVE:
            for position, (existing, _) in enumerate(self._entries):
                if existing != text:
                    continue
                if self.duplicate_keys is DuplicateKeyPolicy.REJECT:
                    raise DuplicateKeyError(text, self.coding_path)
                self._entries[position] = (text, child)
                return child

        self._entries.append((text, child))
        return child

    # ========== Nested containers ==========

    def nested_single_value(self, key) -> SingleValueContainer:
        return self._attach(key, SingleValueContainer)

    def nested_keyed(self, key) -> 'KeyedContainer':
        return self._attach(key, KeyedContainer)

    def nested_unkeyed(self, key) -> UnkeyedContainer:
        return self._attach(key, UnkeyedContainer)

    # ========== Convenience writes ==========

    def encode(self, key, value) -> None:
        """Write value under key through a new single value child."""
        self.nested_single_value(key).encode(value)

    def encode_nil(self, key) -> None:
        self.nested_single_value(key).write_null()

    def encode_if_present(self, key, value) -> None:
        """Write value under key unless it is None."""
        if value is not None:
            self.encode(key, value)

    @property
    def keys(self) -> List[str]:
        return [key for key, _ in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def json_value(self) -> JSONValue:
        return JSONValue.object(
            (key, child.json_value()) for key, child in self._entries
        )
