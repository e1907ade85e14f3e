"""
Byte buffer with indentation tracking.
"""

from ..errors import TextEncodingFailureError

INDENT_UNIT = b'    '


class Writer:
    """
    Accumulates UTF-8 output.

    Text fragments are encoded as they are written, so an unencodable
    fragment fails at the point it is produced.
    """

    def __init__(self):
        self.buffer = bytearray()
        self.indentation_level = 0

    def clear(self) -> None:
        self.buffer.clear()
        self.indentation_level = 0

    def write(self, text: str) -> None:
        try:
            self.buffer += text.encode('utf-8')
        except UnicodeEncodeError as e:
            raise TextEncodingFailureError(text, e) from e

    def write_raw(self, data: bytes) -> None:
        self.buffer += data

    def increment(self) -> None:
        self.indentation_level += 1

    def decrement(self) -> None:
        if self.indentation_level == 0:
            raise RuntimeError("Indentation level is already zero")
        self.indentation_level -= 1

    def write_indent(self) -> None:
        self.buffer += INDENT_UNIT * self.indentation_level

    def getvalue(self) -> bytes:
        return bytes(self.buffer)

    def __len__(self) -> int:
        return len(self.buffer)
