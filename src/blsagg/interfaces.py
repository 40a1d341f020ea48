"""Interface definitions for the curve-primitives provider."""

from __future__ import annotations

from typing import Iterable, Protocol, Tuple, TypeVar

Point = TypeVar("Point")
P1 = TypeVar("P1")
P2 = TypeVar("P2")
GT = TypeVar("GT")


class GroupOps(Protocol[Point]):
    """Prime-order group in additive notation, with its fixed-size compressed codec.

    Implementations return points in one canonical representation so that ``==`` on
    two results means group equality.
    """

    name: str
    size: int

    def zero(self) -> Point:
        ...

    def generator(self) -> Point:
        ...

    def add(self, left: Point, right: Point) -> Point:
        ...

    def neg(self, value: Point) -> Point:
        ...

    def scalar_mul(self, scalar: int, value: Point) -> Point:
        ...

    def encode(self, value: Point) -> bytes:
        ...

    def decode(self, data: bytes) -> Point:
        """Decode ``size`` bytes; raise InvalidEncodingError off-curve or off-subgroup."""
        ...


class PairingOps(Protocol[P1, P2, GT]):
    """Bilinear map e: G1 x G2 -> GT."""

    def pair(self, p: P1, q: P2) -> GT:
        ...

    def product_is_one(self, pairs: Iterable[Tuple[P1, P2]]) -> bool:
        """True iff the product of e(p_i, q_i) is the identity of GT."""
        ...

    def gt_to_bytes(self, value: GT) -> bytes:
        ...


class HashToG2(Protocol[P2]):
    """Domain-separated hash-to-curve map onto G2."""

    def __call__(self, message: bytes, dst: bytes) -> P2:
        ...


class ScalarSampler(Protocol):
    """Secure sampler for scalars in [1, r-1]."""

    def __call__(self) -> int:
        ...
