"""
Unkeyed container: an append-only list of child containers.
"""

from typing import List

from ..model.json_value import JSONValue
from .base import EncodingContainer, IndexKey
from .single_value import SingleValueContainer


class UnkeyedContainer(EncodingContainer):
    """
    Container for sequence-like values.

    Each append creates a new child at the next position and returns it for
    the caller to populate. Reduces to an array in append order.
    """

    kind = 'unkeyed'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._children: List[EncodingContainer] = []

    @property
    def count(self) -> int:
        """Number of children appended so far."""
        return len(self._children)

    def __len__(self) -> int:
        return len(self._children)

    @property
    def nested_coding_path(self) -> list:
        """Coding path of the next child to be appended."""
        return self.coding_path + [IndexKey(self.count)]

    def _append(self, factory) -> EncodingContainer:
        child = factory(
            coding_path=self.nested_coding_path,
            **self._child_options(),
        )
        self._children.append(child)
        return child

    # ========== Nested containers ==========

    def append_single_value(self) -> SingleValueContainer:
        return self._append(SingleValueContainer)

    def append_keyed(self):
        from .keyed import KeyedContainer
        return self._append(KeyedContainer)

    def append_unkeyed(self) -> 'UnkeyedContainer':
        return self._append(UnkeyedContainer)

    # ========== Convenience writes ==========

    def encode(self, value) -> None:
        """Append value through a new single value child."""
        self.append_single_value().encode(value)

    def encode_nil(self) -> None:
        self.append_single_value().write_null()

    def encode_all(self, values) -> None:
        for value in values:
            self.encode(value)

    def json_value(self) -> JSONValue:
        return JSONValue.array(child.json_value() for child in self._children)
