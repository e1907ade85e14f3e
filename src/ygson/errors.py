"""
Error types for encoding operations.

All errors are explicit and never silent.
"""


def _describe_path(coding_path) -> str:
    from .containers.base import format_coding_path
    return format_coding_path(coding_path or [])


class YGSONError(Exception):
    """Base exception for all ygson errors."""
    pass


class EncodingError(YGSONError):
    """Base exception for everything that can make an encode call fail."""
    pass


class ContainerAlreadyCreatedError(EncodingError):
    """Raised when a context is asked for a second top-level container."""

    def __init__(self, coding_path, existing_kind: str, requested_kind: str):
        self.coding_path = list(coding_path or [])
        self.existing_kind = existing_kind
        self.requested_kind = requested_kind
        super().__init__(
            f"Cannot create {requested_kind} container at {_describe_path(self.coding_path)}: "
            f"a {existing_kind} container was already created"
        )


class AlreadyEncodedError(EncodingError):
    """Raised when a single value container is written more than once."""

    def __init__(self, coding_path, value=None):
        self.coding_path = list(coding_path or [])
        self.value = value
        super().__init__(
            f"Value already encoded at {_describe_path(self.coding_path)}; "
            f"refusing to overwrite with {value!r}"
        )


class TextEncodingFailureError(EncodingError):
    """Raised when output text cannot be converted to UTF-8 bytes."""

    def __init__(self, text: str, cause: Exception = None):
        self.text = text
        self.cause = cause
        msg = f"Cannot encode text as UTF-8: {text!r}"
        if cause:
            msg += f"\nCause: {cause}"
        super().__init__(msg)


class UnsupportedCustomStrategyError(EncodingError):
    """Raised when a strategy cannot be applied."""

    def __init__(self, strategy, reason: str):
        self.strategy = strategy
        self.reason = reason
        super().__init__(f"Unsupported strategy {strategy!r}: {reason}")


class UnencodableValueError(EncodingError):
    """Raised when no visitor knows how to describe a value."""

    def __init__(self, value, coding_path=None):
        self.value = value
        self.coding_path = list(coding_path or [])
        super().__init__(
            f"Cannot encode value of type {type(value).__name__} "
            f"at {_describe_path(self.coding_path)}"
        )


class NonConformingFloatError(EncodingError):
    """Raised when NaN or infinity would be rendered."""

    def __init__(self, value: float, coding_path=None):
        self.value = value
        self.coding_path = list(coding_path or [])
        super().__init__(
            f"Float {value!r} at {_describe_path(self.coding_path)} has no JSON representation"
        )


class IntegerOverflowError(EncodingError):
    """Raised when an integer does not fit the signed 64-bit range."""

    def __init__(self, value: int, coding_path=None):
        self.value = value
        self.coding_path = list(coding_path or [])
        super().__init__(
            f"Integer at {_describe_path(self.coding_path)} is outside the signed 64-bit range"
        )


class InvalidKeyError(EncodingError):
    """Raised when a key cannot be converted to text."""

    def __init__(self, key, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid key {key!r}: {reason}")


class DuplicateKeyError(EncodingError):
    """Raised when a keyed container rejects a repeated key."""

    def __init__(self, key: str, coding_path=None):
        self.key = key
        self.coding_path = list(coding_path or [])
        super().__init__(
            f"Duplicate key {key!r} in container at {_describe_path(self.coding_path)}"
        )


class ConfigurationError(YGSONError):
    """Raised when encoder configuration is invalid."""

    def __init__(self, option: str, value=None, reason: str = None):
        self.option = option
        self.value = value
        self.reason = reason
        msg = f"Invalid configuration for {option}: {value!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
