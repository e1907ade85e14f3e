"""
YGSON Encoder.

Main entry point coordinating the container tree and the formatter.
"""

import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from .containers.base import DuplicateKeyPolicy
from .context import EncodingContext
from .errors import ConfigurationError
from .formatting.formatter import Formatter
from .model.json_value import JSONValue
from .strategies import (
    DataEncodingStrategy,
    DateEncodingStrategy,
    KeyEncodingStrategy,
    Options,
    OutputFormatting,
)

logger = logging.getLogger(__name__)


_DATE_STRATEGIES = {
    'deferred_to_date': DateEncodingStrategy.deferred_to_date,
    'seconds_since_epoch': DateEncodingStrategy.seconds_since_epoch,
    'milliseconds_since_epoch': DateEncodingStrategy.milliseconds_since_epoch,
    'iso8601': DateEncodingStrategy.iso8601,
}

_DATA_STRATEGIES = {
    'base64': DataEncodingStrategy.base64,
    'raw': DataEncodingStrategy.raw,
}

_KEY_STRATEGIES = {
    'use_default_keys': KeyEncodingStrategy.use_default_keys,
    'snake_case': KeyEncodingStrategy.snake_case,
}

_CONFIG_KEYS = {
    'output_formatting',
    'date_encoding',
    'date_format',
    'data_encoding',
    'key_encoding',
    'duplicate_keys',
    'ensure_ascii',
}


def _lookup(option: str, name, table: dict):
    try:
        return table[name]()
    except (KeyError, TypeError):
        raise ConfigurationError(
            option, name, f"expected one of {', '.join(sorted(table))}"
        )


def _parse_formatting(value) -> OutputFormatting:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Iterable):
        raise ConfigurationError('output_formatting', value, "expected a list of flag names")

    flags = OutputFormatting.NONE
    for name in value:
        try:
            flags |= OutputFormatting[str(name).upper()]
        except KeyError:
            raise ConfigurationError(
                'output_formatting', name, "expected pretty_printed or sorted_keys"
            )
    return flags


class YGSONEncoder:
    """
    Encodes Python values as JSON.

    Configuration lives on the instance and may be changed between calls:
    - output_formatting: OutputFormatting flags
    - date_encoding_strategy, data_encoding_strategy, key_encoding_strategy
    - duplicate_key_policy: what keyed containers do with repeated keys
    - ensure_ascii: escape every non-ASCII character
    - user_info: ancillary values visible to every EncodingContext
    - describe: visitor turning values into containers

    Each encode call snapshots the configuration, so one encoder can be used
    from several threads as long as it is not reconfigured concurrently.
    """

    def __init__(
        self,
        output_formatting: OutputFormatting = OutputFormatting.NONE,
        date_encoding_strategy: Optional[DateEncodingStrategy] = None,
        data_encoding_strategy: Optional[DataEncodingStrategy] = None,
        key_encoding_strategy: Optional[KeyEncodingStrategy] = None,
        duplicate_key_policy: DuplicateKeyPolicy = DuplicateKeyPolicy.PRESERVE,
        ensure_ascii: bool = False,
        user_info: Optional[dict] = None,
        describe: Optional[Callable] = None,
    ):
        self.output_formatting = output_formatting
        self.date_encoding_strategy = date_encoding_strategy or DateEncodingStrategy.deferred_to_date()
        self.data_encoding_strategy = data_encoding_strategy or DataEncodingStrategy.base64()
        self.key_encoding_strategy = key_encoding_strategy or KeyEncodingStrategy.use_default_keys()
        self.duplicate_key_policy = duplicate_key_policy
        self.ensure_ascii = ensure_ascii
        self.user_info = dict(user_info or {})
        self.describe = describe

    @classmethod
    def from_config(cls, config: Mapping[str, Any], **kwargs) -> 'YGSONEncoder':
        """
        Build an encoder from plain settings, e.g. a parsed TOML table.

        Recognized keys:
            output_formatting: list of "pretty_printed" / "sorted_keys"
            date_encoding: deferred_to_date, seconds_since_epoch,
                milliseconds_since_epoch, iso8601 or formatted
            date_format: strftime pattern, required for formatted
            data_encoding: base64 or raw
            key_encoding: use_default_keys or snake_case
            duplicate_keys: preserve, overwrite or reject
            ensure_ascii: bool

        Extra keyword arguments are passed to the constructor unchanged,
        which is how callback strategies are supplied.

        Raises ConfigurationError for unknown keys or values.
        """
        unknown = set(config) - _CONFIG_KEYS
        if unknown:
            raise ConfigurationError(', '.join(sorted(unknown)), None, "unknown option")

        options = {}

        if 'output_formatting' in config:
            options['output_formatting'] = _parse_formatting(config['output_formatting'])

        if 'date_encoding' in config:
            name = config['date_encoding']
            if name == DateEncodingStrategy.FORMATTED:
                fmt = config.get('date_format')
                if not isinstance(fmt, str) or not fmt:
                    raise ConfigurationError('date_format', fmt, "required for formatted dates")
                options['date_encoding_strategy'] = DateEncodingStrategy.formatted(fmt)
            else:
                options['date_encoding_strategy'] = _lookup('date_encoding', name, _DATE_STRATEGIES)
        elif 'date_format' in config:
            raise ConfigurationError('date_format', config['date_format'], "only valid with date_encoding = formatted")

        if 'data_encoding' in config:
            options['data_encoding_strategy'] = _lookup('data_encoding', config['data_encoding'], _DATA_STRATEGIES)

        if 'key_encoding' in config:
            options['key_encoding_strategy'] = _lookup('key_encoding', config['key_encoding'], _KEY_STRATEGIES)

        if 'duplicate_keys' in config:
            try:
                options['duplicate_key_policy'] = DuplicateKeyPolicy(config['duplicate_keys'])
            except ValueError:
                raise ConfigurationError(
                    'duplicate_keys', config['duplicate_keys'], "expected preserve, overwrite or reject"
                )

        if 'ensure_ascii' in config:
            if not isinstance(config['ensure_ascii'], bool):
                raise ConfigurationError('ensure_ascii', config['ensure_ascii'], "expected a bool")
            options['ensure_ascii'] = config['ensure_ascii']

        options.update(kwargs)
        return cls(**options)

    def options(self) -> Options:
        """Snapshot of the current configuration."""
        return Options(
            formatting=self.output_formatting,
            date_encoding=self.date_encoding_strategy,
            data_encoding=self.data_encoding_strategy,
            key_encoding=self.key_encoding_strategy,
            ensure_ascii=self.ensure_ascii,
            user_info=self.user_info,
            duplicate_keys=self.duplicate_key_policy,
            describe=self.describe,
        )

    # ========== Encoding ==========

    def _build(self, value, options: Options) -> JSONValue:
        context = EncodingContext(
            user_info=options.user_info,
            duplicate_keys=options.duplicate_keys,
            describe=options.describe,
        )
        context.encode(value)
        return context.json_value()

    def encode_json_value(self, value) -> JSONValue:
        """Run the visitor and return the intermediate tree without rendering."""
        return self._build(value, self.options())

    def encode(self, value) -> bytes:
        """
        Encode value to UTF-8 JSON bytes.

        Raises EncodingError (or a subclass) on failure.
        """
        options = self.options()
        logger.debug("Encoding %s with %r", type(value).__name__, options)
        top_level = self._build(value, options)
        return Formatter(top_level, options).write_json()

    def encode_to_str(self, value) -> str:
        """Encode value to a JSON str. Raw binary passthrough is not allowed here."""
        options = self.options()
        top_level = self._build(value, options)
        return Formatter(top_level, options).to_text()

    def __repr__(self) -> str:
        return f"YGSONEncoder({self.options()!r})"


def dumps(value, **kwargs) -> str:
    """
    Encode value to a JSON str with a one-off encoder.

    Keyword arguments are YGSONEncoder constructor arguments.
    """
    return YGSONEncoder(**kwargs).encode_to_str(value)
