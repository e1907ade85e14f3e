"""
Serializable protocol and the built-in value visitor.

A visitor receives a value and an EncodingContext, asks the context for one
container matching the value's shape and fills it in. Types that need a
custom JSON shape implement Serializable; plain Python values are handled
by describe().
"""

import dataclasses
import enum
import numbers
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime

from .errors import UnencodableValueError


class Serializable(ABC):
    """
    Capability of describing oneself to an EncodingContext.

    Any object with an ``encode_to(context)`` method counts as Serializable,
    subclassing is optional.
    """

    @abstractmethod
    def encode_to(self, context) -> None:
        """Request one container from context and write this value into it."""

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is Serializable:
            for klass in subclass.__mro__:
                if 'encode_to' in klass.__dict__:
                    if callable(klass.__dict__['encode_to']):
                        return True
                    break
        return NotImplemented


_SCALAR_TYPES = (bool, numbers.Real, str, datetime, bytes, bytearray, memoryview)


def describe(value, context) -> None:
    """
    Default visitor.

    - Serializable objects describe themselves
    - enum members are encoded through their value
    - None, numbers, text, datetimes and bytes become single values
    - dataclass instances become keyed containers in field order
    - mappings become keyed containers in iteration order
    - lists and tuples become unkeyed containers

    Raises UnencodableValueError for anything else.
    """
    if isinstance(value, Serializable):
        value.encode_to(context)
    elif isinstance(value, enum.Enum):
        describe(value.value, context)
    elif value is None or isinstance(value, _SCALAR_TYPES):
        context.make_single_value_container().encode(value)
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        container = context.make_keyed_container()
        for field in dataclasses.fields(value):
            container.encode(field.name, getattr(value, field.name))
    elif isinstance(value, Mapping):
        container = context.make_keyed_container()
        for key, item in value.items():
            container.encode(key, item)
    elif isinstance(value, (list, tuple)):
        context.make_unkeyed_container().encode_all(value)
    else:
        raise UnencodableValueError(value, context.coding_path)
