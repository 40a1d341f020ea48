from __future__ import annotations

from typing import TYPE_CHECKING, Union

from .errors import InvalidEncodingError
from .points import G1Point, G2Point, PublicKey, Signature

if TYPE_CHECKING:
    from .core import Params

PUBLIC_KEY_SIZE = 48  # compressed G1
SIGNATURE_SIZE = 96  # compressed G2

BytesLike = Union[bytes, bytearray, memoryview]


def _as_bytes(data: object, what: str) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes, got {type(data).__name__}")
    return bytes(data)


def encode_public_key(public_key: PublicKey) -> bytes:
    """Serialize a public key (or aggregate public key) to its 48-byte form."""
    if not isinstance(public_key, G1Point):
        raise TypeError(f"expected G1Point, got {type(public_key).__name__}")
    out = public_key.to_bytes()
    if len(out) != PUBLIC_KEY_SIZE:
        raise ValueError(f"G1 provider produced a {len(out)}-byte encoding")
    return out


def decode_public_key(params: "Params", data: BytesLike) -> PublicKey:
    """Parse 48 bytes into a validated public key.

    Raises InvalidEncodingError on wrong length, a point off the curve or outside
    the prime-order subgroup, and on the point at infinity.
    """
    buf = _as_bytes(data, "public key")
    if len(buf) != PUBLIC_KEY_SIZE:
        raise InvalidEncodingError(
            f"public key must be {PUBLIC_KEY_SIZE} bytes, got {len(buf)}"
        )
    point = G1Point(params.G1_ops.decode(buf), params.G1_ops)
    if point.is_zero():
        raise InvalidEncodingError("public key is the point at infinity")
    return point


def encode_signature(signature: Signature) -> bytes:
    """Serialize a signature (or aggregate signature) to its 96-byte form."""
    if not isinstance(signature, G2Point):
        raise TypeError(f"expected G2Point, got {type(signature).__name__}")
    out = signature.to_bytes()
    if len(out) != SIGNATURE_SIZE:
        raise ValueError(f"G2 provider produced a {len(out)}-byte encoding")
    return out


def decode_signature(params: "Params", data: BytesLike) -> Signature:
    """Parse 96 bytes into a validated signature point."""
    buf = _as_bytes(data, "signature")
    if len(buf) != SIGNATURE_SIZE:
        raise InvalidEncodingError(
            f"signature must be {SIGNATURE_SIZE} bytes, got {len(buf)}"
        )
    return G2Point(params.G2_ops.decode(buf), params.G2_ops)


def bytes_to_hex(data: bytes) -> str:
    return "0x" + bytes(data).hex()


def truncate_hex(hex_str: str, length: int = 8) -> str:
    """Shorten ``0x...`` strings for display, keeping ``length`` chars at each end."""
    if len(hex_str) <= length * 2 + 4:
        return hex_str
    return f"{hex_str[:length + 2]}...{hex_str[-length:]}"
