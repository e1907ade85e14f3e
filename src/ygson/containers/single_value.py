"""
Write-once leaf container.
"""

import enum
import numbers
from datetime import datetime

from ..errors import AlreadyEncodedError, IntegerOverflowError
from ..model.json_value import INT64_MAX, INT64_MIN, JSONValue
from .base import EncodingContainer


class SingleValueContainer(EncodingContainer):
    """
    Holds exactly one scalar value.

    Every write checks that nothing was written before; a second write is a
    programmer error and raises AlreadyEncodedError. Integer widths collapse
    to one integer variant, floating widths to one float variant.
    """

    kind = 'single value'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.has_written = False
        self._value = JSONValue.null()

    def _check_can_write(self, value) -> None:
        if self.has_written:
            raise AlreadyEncodedError(self.coding_path, value)

    def _store(self, value: JSONValue) -> None:
        self._value = value
        self.has_written = True

    # ========== Scalar writes ==========

    def write_null(self) -> None:
        self._check_can_write(None)
        self._store(JSONValue.null())

    def write_bool(self, value: bool) -> None:
        self._check_can_write(value)
        self._store(JSONValue.boolean(value))

    def write_integer(self, value: numbers.Integral) -> None:
        self._check_can_write(value)
        if not isinstance(value, numbers.Integral):
            raise TypeError(f"Expected an integer, got {type(value).__name__}")
        if not INT64_MIN <= value <= INT64_MAX:
            raise IntegerOverflowError(value, self.coding_path)
        self._store(JSONValue.integer(int(value)))

    def write_float(self, value: numbers.Real) -> None:
        self._check_can_write(value)
        if not isinstance(value, numbers.Real):
            raise TypeError(f"Expected a real number, got {type(value).__name__}")
        self._store(JSONValue.float(float(value)))

    def write_text(self, value: str) -> None:
        self._check_can_write(value)
        if not isinstance(value, str):
            raise TypeError(f"Expected str, got {type(value).__name__}")
        self._store(JSONValue.text(value))

    def write_date(self, value: datetime) -> None:
        """Store a timestamp; its JSON form is chosen by the date strategy."""
        self._check_can_write(value)
        self._store(JSONValue.date(value))

    def write_data(self, value) -> None:
        """Store binary data; its JSON form is chosen by the data strategy."""
        self._check_can_write(value)
        self._store(JSONValue.data(value))

    def write_nested(self, value) -> None:
        """
        Encode an arbitrary value through a fresh EncodingContext.

        The nested context shares this container's user_info and duplicate
        key policy but gets its own copy of the coding path.
        """
        from ..context import EncodingContext

        self._check_can_write(value)
        context = EncodingContext(
            coding_path=self.coding_path,
            **self._child_options(),
        )
        context.encode(value)
        self._store(context.json_value())

    def encode(self, value) -> None:
        """Write any value, choosing the typed write from its Python type."""
        if value is None:
            self.write_null()
        elif isinstance(value, enum.Enum):
            self.write_nested(value)
        elif isinstance(value, bool):
            self.write_bool(value)
        elif isinstance(value, numbers.Integral):
            self.write_integer(value)
        elif isinstance(value, numbers.Real):
            self.write_float(value)
        elif isinstance(value, str):
            self.write_text(value)
        elif isinstance(value, datetime):
            self.write_date(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            self.write_data(value)
        else:
            self.write_nested(value)

    def json_value(self) -> JSONValue:
        return self._value
