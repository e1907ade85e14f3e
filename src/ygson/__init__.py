from .encoder import YGSONEncoder, dumps
from .context import EncodingContext
from .containers.base import DuplicateKeyPolicy, EncodingContainer, IndexKey
from .containers.keyed import KeyedContainer
from .containers.single_value import SingleValueContainer
from .containers.unkeyed import UnkeyedContainer
from .formatting.formatter import Formatter
from .model.json_value import JSONKind, JSONValue
from .serializable import Serializable, describe
from .strategies import (
    DataEncodingStrategy,
    DateEncodingStrategy,
    KeyEncodingStrategy,
    Options,
    OutputFormatting,
)
from .errors import (
    YGSONError,
    EncodingError,
    ContainerAlreadyCreatedError,
    AlreadyEncodedError,
    TextEncodingFailureError,
    UnsupportedCustomStrategyError,
    UnencodableValueError,
    NonConformingFloatError,
    IntegerOverflowError,
    InvalidKeyError,
    DuplicateKeyError,
    ConfigurationError,
)

__all__ = [
    'YGSONEncoder',
    'dumps',
    'EncodingContext',
    'DuplicateKeyPolicy',
    'EncodingContainer',
    'IndexKey',
    'KeyedContainer',
    'SingleValueContainer',
    'UnkeyedContainer',
    'Formatter',
    'JSONKind',
    'JSONValue',
    'Serializable',
    'describe',
    'DataEncodingStrategy',
    'DateEncodingStrategy',
    'KeyEncodingStrategy',
    'Options',
    'OutputFormatting',
    'YGSONError',
    'EncodingError',
    'ContainerAlreadyCreatedError',
    'AlreadyEncodedError',
    'TextEncodingFailureError',
    'UnsupportedCustomStrategyError',
    'UnencodableValueError',
    'NonConformingFloatError',
    'IntegerOverflowError',
    'InvalidKeyError',
    'DuplicateKeyError',
    'ConfigurationError',
]
