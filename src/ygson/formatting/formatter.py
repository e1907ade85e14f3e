"""
Renders a finished JSONValue tree to JSON text.

Rendering is a synchronous recursive descent, one frame per nesting level.
Very deep trees can exceed the interpreter's recursion limit; RecursionError
is not caught.
"""

import base64
import json
import logging
import math
from datetime import datetime, timezone
from typing import List, Optional

from ..containers.base import IndexKey, key_text
from ..context import EncodingContext
from ..errors import (
    IntegerOverflowError,
    NonConformingFloatError,
    UnsupportedCustomStrategyError,
)
from ..model.json_value import INT64_MAX, INT64_MIN, JSONKind, JSONValue
from ..strategies import (
    DataEncodingStrategy,
    DateEncodingStrategy,
    KeyEncodingStrategy,
    Options,
)
from .keys import natural_sort_key, snake_case
from .writer import Writer

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Formatter:
    """
    Walks a JSONValue and writes JSON into a byte buffer.

    Args:
        top_level: the tree to render
        options: formatting flags and strategies
        binary_safe: whether raw binary passthrough may be written
    """

    def __init__(
        self,
        top_level: JSONValue,
        options: Optional[Options] = None,
        binary_safe: bool = True,
    ):
        self.top_level = top_level
        self.options = options or Options()
        self.binary_safe = binary_safe
        self.writer = Writer()
        self._path: List = []

    @property
    def pretty_printed(self) -> bool:
        return self.options.pretty_printed

    @property
    def sorted_keys(self) -> bool:
        return self.options.sorted_keys

    def write_json(self) -> bytes:
        """Render the whole tree and return UTF-8 bytes."""
        return self._render(allow_raw=self.binary_safe)

    def to_text(self) -> str:
        """
        Render to str.

        Raw binary passthrough is refused here since arbitrary bytes need not
        be valid text.
        """
        return self._render(allow_raw=False).decode('utf-8')

    def _render(self, allow_raw: bool) -> bytes:
        self._allow_raw = allow_raw
        self.writer.clear()
        self._path = []
        self._write_value(self.top_level)
        logger.debug(
            "Rendered %s value to %d bytes",
            self.top_level.kind.value,
            len(self.writer),
        )
        return self.writer.getvalue()

    # ========== Values ==========

    def _write_value(self, value: JSONValue) -> None:
        kind = value.kind
        if kind is JSONKind.OBJECT:
            self._write_object(value.items)
        elif kind is JSONKind.ARRAY:
            self._write_array(value.elements)
        elif kind is JSONKind.DATE:
            self._write_date(value.payload)
        elif kind is JSONKind.DATA:
            self._write_data(value.payload)
        else:
            self._write_primitive(value)

    def _write_primitive(self, value: JSONValue) -> None:
        kind = value.kind
        if kind is JSONKind.NULL:
            self.writer.write('null')
        elif kind is JSONKind.BOOL:
            self.writer.write('true' if value.payload else 'false')
        elif kind is JSONKind.INTEGER:
            if not INT64_MIN <= value.payload <= INT64_MAX:
                raise IntegerOverflowError(value.payload, self._path)
            self.writer.write(str(value.payload))
        elif kind is JSONKind.FLOAT:
            number = value.payload
            if not math.isfinite(number):
                raise NonConformingFloatError(number, self._path)
            self.writer.write(repr(number))
        elif kind is JSONKind.TEXT:
            self.writer.write(self._quote(value.payload))
        else:
            raise TypeError(f"Not a primitive JSON value: {value!r}")

    def _quote(self, text: str) -> str:
        return json.dumps(text, ensure_ascii=self.options.ensure_ascii)

    # ========== Composites ==========

    def _open(self, bracket: str) -> None:
        self.writer.write(bracket)
        if self.pretty_printed:
            self.writer.write('\n')
            self.writer.increment()

    def _separate(self, position: int) -> None:
        if position:
            self.writer.write(',\n' if self.pretty_printed else ',')
        if self.pretty_printed:
            self.writer.write_indent()

    def _close(self, bracket: str) -> None:
        if self.pretty_printed:
            self.writer.write('\n')
            self.writer.decrement()
            self.writer.write_indent()
        self.writer.write(bracket)

    def _write_object(self, items) -> None:
        if not items:
            self.writer.write('{}')
            return

        entries = [(self._convert_key(key), key, value) for key, value in items]
        if self.sorted_keys:
            entries.sort(key=lambda entry: natural_sort_key(entry[0]))

        key_separator = ': ' if self.pretty_printed else ':'
        self._open('{')
        for position, (output_key, key, value) in enumerate(entries):
            self._separate(position)
            self.writer.write(self._quote(output_key))
            self.writer.write(key_separator)
            self._path.append(key)
            self._write_value(value)
            self._path.pop()
        self._close('}')

    def _write_array(self, elements) -> None:
        if not elements:
            self.writer.write('[]')
            return

        self._open('[')
        for position, element in enumerate(elements):
            self._separate(position)
            self._path.append(IndexKey(position))
            self._write_value(element)
            self._path.pop()
        self._close(']')

    # ========== Strategies ==========

    def _convert_key(self, key: str) -> str:
        strategy = self.options.key_encoding
        if strategy.kind == KeyEncodingStrategy.DEFAULT:
            return key
        if strategy.kind == KeyEncodingStrategy.SNAKE_CASE:
            return snake_case(key)
        if strategy.kind == KeyEncodingStrategy.CUSTOM:
            return key_text(strategy.argument(self._path + [key]))
        raise UnsupportedCustomStrategyError(strategy, "unknown key encoding strategy")

    def _write_custom(self, callback, payload) -> None:
        context = EncodingContext(
            coding_path=self._path,
            user_info=self.options.user_info,
            duplicate_keys=self.options.duplicate_keys,
            describe=self.options.describe,
        )
        logger.debug("Invoking custom strategy %r", callback)
        callback(payload, context)
        self._write_value(context.json_value())

    def _write_date(self, value: datetime) -> None:
        strategy = self.options.date_encoding
        kind = strategy.kind
        if kind == DateEncodingStrategy.DEFERRED:
            self._write_value(JSONValue.text(value.isoformat()))
        elif kind == DateEncodingStrategy.SECONDS:
            self._write_value(JSONValue.float(_as_utc(value).timestamp()))
        elif kind == DateEncodingStrategy.MILLISECONDS:
            self._write_value(JSONValue.float(_as_utc(value).timestamp() * 1000.0))
        elif kind == DateEncodingStrategy.ISO8601:
            utc = _as_utc(value).replace(microsecond=0, tzinfo=None)
            self._write_value(JSONValue.text(utc.isoformat() + 'Z'))
        elif kind == DateEncodingStrategy.FORMATTED:
            self._write_value(JSONValue.text(value.strftime(strategy.argument)))
        elif kind == DateEncodingStrategy.CUSTOM:
            self._write_custom(strategy.argument, value)
        else:
            raise UnsupportedCustomStrategyError(strategy, "unknown date encoding strategy")

    def _write_data(self, data: bytes) -> None:
        strategy = self.options.data_encoding
        kind = strategy.kind
        if kind == DataEncodingStrategy.BASE64:
            self._write_value(JSONValue.text(base64.b64encode(data).decode('ascii')))
        elif kind == DataEncodingStrategy.RAW:
            if not self._allow_raw:
                raise UnsupportedCustomStrategyError(
                    strategy, "raw binary passthrough requires byte output"
                )
            self.writer.write_raw(data)
        elif kind == DataEncodingStrategy.CUSTOM:
            self._write_custom(strategy.argument, data)
        else:
            raise UnsupportedCustomStrategyError(strategy, "unknown data encoding strategy")
