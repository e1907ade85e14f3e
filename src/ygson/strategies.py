"""
Swappable rendering policies.

Strategies are read-only configuration: build one with its classmethod
constructors and hand it to the encoder.
"""

import enum
from typing import Callable, Optional

from .containers.base import DuplicateKeyPolicy
from .errors import UnsupportedCustomStrategyError


class OutputFormatting(enum.Flag):
    """Combinable output flags."""

    NONE = 0
    PRETTY_PRINTED = 1 << 0
    SORTED_KEYS = 1 << 1


class _Strategy:
    """A strategy variant plus its optional argument (format or callback)."""

    __slots__ = ('kind', 'argument')

    def __init__(self, kind: str, argument=None):
        object.__setattr__(self, 'kind', kind)
        object.__setattr__(self, 'argument', argument)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.kind == other.kind and self.argument == other.argument

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.kind))

    def __repr__(self) -> str:
        if self.argument is None:
            return f"{type(self).__name__}.{self.kind}()"
        return f"{type(self).__name__}.{self.kind}({self.argument!r})"


class DateEncodingStrategy(_Strategy):
    """
    How datetime values are rendered.

    - deferred_to_date: the value's own isoformat() text
    - seconds_since_epoch / milliseconds_since_epoch: float
    - iso8601: UTC text without fractional seconds, e.g. 2019-11-04T10:00:00Z
    - formatted(fmt): strftime(fmt) text
    - custom(fn): fn(date, context) writes into a fresh EncodingContext
    """

    DEFERRED = 'deferred_to_date'
    SECONDS = 'seconds_since_epoch'
    MILLISECONDS = 'milliseconds_since_epoch'
    ISO8601 = 'iso8601'
    FORMATTED = 'formatted'
    CUSTOM = 'custom'

    @classmethod
    def deferred_to_date(cls) -> 'DateEncodingStrategy':
        return cls(cls.DEFERRED)

    @classmethod
    def seconds_since_epoch(cls) -> 'DateEncodingStrategy':
        return cls(cls.SECONDS)

    @classmethod
    def milliseconds_since_epoch(cls) -> 'DateEncodingStrategy':
        return cls(cls.MILLISECONDS)

    @classmethod
    def iso8601(cls) -> 'DateEncodingStrategy':
        return cls(cls.ISO8601)

    @classmethod
    def formatted(cls, fmt: str) -> 'DateEncodingStrategy':
        return cls(cls.FORMATTED, fmt)

    @classmethod
    def custom(cls, fn: Callable) -> 'DateEncodingStrategy':
        return cls(cls.CUSTOM, fn)


class DataEncodingStrategy(_Strategy):
    """
    How binary values are rendered.

    - base64: standard base64 text
    - raw: bytes copied verbatim into byte output
    - custom(fn): fn(data, context) writes into a fresh EncodingContext
    """

    BASE64 = 'base64'
    RAW = 'raw'
    CUSTOM = 'custom'

    @classmethod
    def base64(cls) -> 'DataEncodingStrategy':
        return cls(cls.BASE64)

    @classmethod
    def raw(cls) -> 'DataEncodingStrategy':
        return cls(cls.RAW)

    @classmethod
    def custom(cls, fn: Callable) -> 'DataEncodingStrategy':
        return cls(cls.CUSTOM, fn)


class KeyEncodingStrategy(_Strategy):
    """
    How object keys are rendered.

    - use_default_keys: as written
    - snake_case: camelCase keys converted to snake_case
    - custom(fn): fn(coding_path) returns the key text; the path ends with
      the key being converted
    """

    DEFAULT = 'use_default_keys'
    SNAKE_CASE = 'snake_case'
    CUSTOM = 'custom'

    @classmethod
    def use_default_keys(cls) -> 'KeyEncodingStrategy':
        return cls(cls.DEFAULT)

    @classmethod
    def snake_case(cls) -> 'KeyEncodingStrategy':
        return cls(cls.SNAKE_CASE)

    @classmethod
    def custom(cls, fn: Callable) -> 'KeyEncodingStrategy':
        return cls(cls.CUSTOM, fn)


def _checked(strategy, expected: type):
    if not isinstance(strategy, expected):
        raise UnsupportedCustomStrategyError(
            strategy, f"expected a {expected.__name__}"
        )
    return strategy


class Options:
    """
    Frozen snapshot of the formatter settings for one encode call.
    """

    def __init__(
        self,
        formatting: OutputFormatting = OutputFormatting.NONE,
        date_encoding: Optional[DateEncodingStrategy] = None,
        data_encoding: Optional[DataEncodingStrategy] = None,
        key_encoding: Optional[KeyEncodingStrategy] = None,
        ensure_ascii: bool = False,
        user_info: Optional[dict] = None,
        duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.PRESERVE,
        describe: Optional[Callable] = None,
    ):
        self.formatting = OutputFormatting(formatting)
        self.date_encoding = _checked(
            date_encoding or DateEncodingStrategy.deferred_to_date(), DateEncodingStrategy
        )
        self.data_encoding = _checked(
            data_encoding or DataEncodingStrategy.base64(), DataEncodingStrategy
        )
        self.key_encoding = _checked(
            key_encoding or KeyEncodingStrategy.use_default_keys(), KeyEncodingStrategy
        )
        self.ensure_ascii = ensure_ascii
        self.user_info = dict(user_info or {})
        self.duplicate_keys = duplicate_keys
        self.describe = describe

    @property
    def pretty_printed(self) -> bool:
        return bool(self.formatting & OutputFormatting.PRETTY_PRINTED)

    @property
    def sorted_keys(self) -> bool:
        return bool(self.formatting & OutputFormatting.SORTED_KEYS)

    def __repr__(self) -> str:
        return (
            f"Options(formatting={self.formatting!r}, "
            f"date_encoding={self.date_encoding!r}, "
            f"data_encoding={self.data_encoding!r}, "
            f"key_encoding={self.key_encoding!r})"
        )
