"""
Intermediate JSON value model.

A JSONValue is produced once by the containers and read by the formatter.
"""

import enum
from datetime import datetime
from typing import Any, List, Tuple

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class JSONKind(enum.Enum):
    """Variant tag of a JSONValue."""

    BOOL = 'bool'
    INTEGER = 'integer'
    FLOAT = 'float'
    TEXT = 'text'
    NULL = 'null'
    DATE = 'date'
    DATA = 'data'
    ARRAY = 'array'
    OBJECT = 'object'


class JSONValue:
    """
    Immutable tagged union of everything the encoder can produce.

    Arrays hold a tuple of JSONValue. Objects hold a tuple of
    (key, JSONValue) pairs in insertion order; duplicate keys are
    representable.
    """

    __slots__ = ('_kind', '_payload')

    def __init__(self, kind: JSONKind, payload: Any = None):
        object.__setattr__(self, '_kind', kind)
        object.__setattr__(self, '_payload', payload)

    def __setattr__(self, name, value):
        raise AttributeError(f"JSONValue is immutable (cannot set {name})")

    # ========== Constructors ==========

    @classmethod
    def boolean(cls, value: bool) -> 'JSONValue':
        return cls(JSONKind.BOOL, bool(value))

    @classmethod
    def integer(cls, value: int) -> 'JSONValue':
        return cls(JSONKind.INTEGER, int(value))

    @classmethod
    def float(cls, value) -> 'JSONValue':
        return cls(JSONKind.FLOAT, float(value))

    @classmethod
    def text(cls, value: str) -> 'JSONValue':
        return cls(JSONKind.TEXT, str(value))

    @classmethod
    def null(cls) -> 'JSONValue':
        return NULL

    @classmethod
    def date(cls, value: datetime) -> 'JSONValue':
        return cls(JSONKind.DATE, value)

    @classmethod
    def data(cls, value) -> 'JSONValue':
        return cls(JSONKind.DATA, bytes(value))

    @classmethod
    def array(cls, elements) -> 'JSONValue':
        return cls(JSONKind.ARRAY, tuple(elements))

    @classmethod
    def object(cls, items) -> 'JSONValue':
        return cls(JSONKind.OBJECT, tuple((str(k), v) for k, v in items))

    # ========== Accessors ==========

    @property
    def kind(self) -> JSONKind:
        return self._kind

    @property
    def payload(self) -> Any:
        return self._payload

    @property
    def is_null(self) -> bool:
        return self._kind is JSONKind.NULL

    @property
    def elements(self) -> Tuple['JSONValue', ...]:
        """Array elements; raises TypeError for other kinds."""
        if self._kind is not JSONKind.ARRAY:
            raise TypeError(f"{self._kind.value} value has no elements")
        return self._payload

    @property
    def items(self) -> Tuple[Tuple[str, 'JSONValue'], ...]:
        """Object (key, value) pairs; raises TypeError for other kinds."""
        if self._kind is not JSONKind.OBJECT:
            raise TypeError(f"{self._kind.value} value has no items")
        return self._payload

    def keys(self) -> List[str]:
        return [key for key, _ in self.items]

    def to_python(self) -> Any:
        """
        Convert to plain Python structures.

        Objects become dicts (a later duplicate key wins), arrays become
        lists. Dates and binary payloads are returned as-is since their
        JSON form depends on the formatter strategies.
        """
        if self._kind is JSONKind.ARRAY:
            return [element.to_python() for element in self._payload]
        if self._kind is JSONKind.OBJECT:
            return {key: value.to_python() for key, value in self._payload}
        return self._payload

    # ========== Structural equality ==========

    def __eq__(self, other) -> bool:
        if not isinstance(other, JSONValue):
            return NotImplemented
        return self._kind is other._kind and self._payload == other._payload

    def __hash__(self) -> int:
        return hash((self._kind, self._payload))

    def __repr__(self) -> str:
        if self._kind is JSONKind.NULL:
            return "JSONValue.null()"
        if self._kind is JSONKind.ARRAY:
            return f"JSONValue.array({list(self._payload)!r})"
        if self._kind is JSONKind.OBJECT:
            return f"JSONValue.object({list(self._payload)!r})"
        if self._kind is JSONKind.BOOL:
            return f"JSONValue.boolean({self._payload!r})"
        return f"JSONValue.{self._kind.value}({self._payload!r})"


NULL = JSONValue(JSONKind.NULL)
