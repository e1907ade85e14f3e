"""
Test package structure and exports.

Verifies that the package is correctly structured and exposes the right API.
"""

import pytest
import ygson
from ygson import (
    YGSONEncoder,
    EncodingContext,
    JSONValue,
    Formatter,
    EncodingError,
)


def test_package_exports():
    """Verify that the package exposes the expected classes."""
    assert YGSONEncoder is not None
    assert EncodingContext is not None
    assert JSONValue is not None
    assert Formatter is not None
    assert EncodingError is not None


def test_all_names_resolve():
    """Every name in __all__ is importable from the package."""
    for name in ygson.__all__:
        assert getattr(ygson, name) is not None


@pytest.mark.parametrize('name', [
    'ContainerAlreadyCreatedError',
    'AlreadyEncodedError',
    'TextEncodingFailureError',
    'UnsupportedCustomStrategyError',
    'UnencodableValueError',
    'NonConformingFloatError',
    'IntegerOverflowError',
    'InvalidKeyError',
    'DuplicateKeyError',
])
def test_errors_are_encoding_errors(name):
    """Every encode failure is catchable as EncodingError."""
    assert issubclass(getattr(ygson, name), EncodingError)


def test_subpackage_imports():
    """Verify that subpackages are importable (even if not exposed directly)."""
    import ygson.containers.keyed
    import ygson.formatting.keys
    import ygson.formatting.writer
    import ygson.model.json_value

    assert ygson.containers.keyed.KeyedContainer is not None
    assert ygson.formatting.keys.snake_case is not None
    assert ygson.formatting.writer.Writer is not None
