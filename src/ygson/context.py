"""
Encoding context: the root of one container tree.

Every value being encoded, the top-level one or a nested value written
through a single value slot, gets its own context. A context owns at most
one container.
"""

import logging
from typing import Callable, List, Optional

from .containers.base import DuplicateKeyPolicy, EncodingContainer, format_coding_path
from .containers.keyed import KeyedContainer
from .containers.single_value import SingleValueContainer
from .containers.unkeyed import UnkeyedContainer
from .errors import ContainerAlreadyCreatedError
from .model.json_value import JSONValue

logger = logging.getLogger(__name__)


class EncodingContext:
    """
    Entry point handed to a visitor.

    The visitor asks for exactly one container matching the shape of its
    value and populates it. json_value() reduces whatever was built, or
    returns null when nothing was.
    """

    def __init__(
        self,
        coding_path: Optional[List] = None,
        user_info: Optional[dict] = None,
        duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.PRESERVE,
        describe: Optional[Callable] = None,
    ):
        """
        Create a context.

        Args:
            coding_path: locators of this value inside the root value
            user_info: ancillary configuration shared with nested contexts
            duplicate_keys: policy applied by keyed containers
            describe: visitor used for nested values, defaults to
                ygson.serializable.describe
        """
        self.coding_path = list(coding_path or [])
        self.user_info = user_info if user_info is not None else {}
        self.duplicate_keys = duplicate_keys
        self.describe = describe
        self.container: Optional[EncodingContainer] = None

    def _create(self, factory) -> EncodingContainer:
        if self.container is not None:
            raise ContainerAlreadyCreatedError(
                self.coding_path,
                existing_kind=self.container.kind,
                requested_kind=factory.kind,
            )
        self.container = factory(
            coding_path=self.coding_path,
            user_info=self.user_info,
            duplicate_keys=self.duplicate_keys,
            describe=self.describe,
        )
        return self.container

    def make_keyed_container(self) -> KeyedContainer:
        return self._create(KeyedContainer)

    def make_unkeyed_container(self) -> UnkeyedContainer:
        return self._create(UnkeyedContainer)

    def make_single_value_container(self) -> SingleValueContainer:
        return self._create(SingleValueContainer)

    def encode(self, value) -> None:
        """Drive the visitor for value against this context."""
        describe = self.describe
        if describe is None:
            from .serializable import describe
        if self.coding_path and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Encoding nested %s at %s",
                type(value).__name__,
                format_coding_path(self.coding_path),
            )
        describe(value, self)

    def nested_context(self) -> 'EncodingContext':
        """Fresh context sharing this one's configuration."""
        return EncodingContext(
            coding_path=self.coding_path,
            user_info=self.user_info,
            duplicate_keys=self.duplicate_keys,
            describe=self.describe,
        )

    def json_value(self) -> JSONValue:
        if self.container is None:
            return JSONValue.null()
        return self.container.json_value()

    def __repr__(self) -> str:
        kind = self.container.kind if self.container is not None else None
        return f"EncodingContext(path={format_coding_path(self.coding_path)}, container={kind})"
