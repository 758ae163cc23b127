"""Scalar codec - lossless conversion between domain scalars and column text.

Integers are stored as decimal text so values beyond 64 bits survive, program
bytes as padded base64, addresses in their canonical base32 form.
"""

import base64
import binascii

from algosdk import encoding

from src.funding.core.exceptions import (
    EncodingFailure,
    MalformedAddress,
    MalformedEncoding,
    ValidationError,
)


def encode_uint(value: int) -> str:
    """Encode a non-negative integer as decimal text."""
    # bool is an int subclass but never a valid amount or id
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"Expected an unsigned integer, got {type(value).__name__}")
    if value < 0:
        raise ValidationError("Expected an unsigned integer, got a negative value")
    try:
        return str(value)
    except ValueError as e:
        # Beyond the interpreter's int/str conversion digit limit
        raise ValidationError(f"Integer too large to store: {e}") from e


def decode_uint(text: str) -> int:
    """Decode decimal text into a non-negative integer."""
    # int() would also accept "+1", " 1", "1_000" and non-ASCII digits
    if not text or not text.isascii() or not text.isdigit():
        raise EncodingFailure(f"Not an unsigned decimal integer: {text[:64]!r}")
    try:
        return int(text)
    except ValueError as e:
        raise EncodingFailure(f"Stored integer too large to decode: {e}") from e


def is_valid_address(text: str) -> bool:
    return isinstance(text, str) and encoding.is_valid_address(text)


def encode_address(address: str) -> str:
    """Encode an address for storage (its canonical string form)."""
    if not is_valid_address(address):
        raise MalformedAddress(f"Invalid address: {address!r}")
    return address


def decode_address(text: str) -> str:
    """Decode a stored address, verifying length, alphabet and checksum."""
    if not is_valid_address(text):
        raise MalformedAddress(f"Invalid stored address: {text!r}")
    return text


def encode_program(program: bytes) -> str:
    """Encode compiled program bytes as padded base64 text."""
    if not isinstance(program, bytes | bytearray):
        raise ValidationError(f"Expected program bytes, got {type(program).__name__}")
    return base64.b64encode(program).decode("ascii")


def decode_program(text: str) -> bytes:
    """Decode base64 text back into the exact program bytes."""
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise MalformedEncoding(f"Invalid base64 program: {e}") from e
