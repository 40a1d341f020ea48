"""Concrete point types for the two source groups.

G1 and G2 values are distinct types. Arithmetic that mixes a G1Point with a
G2Point raises TypeError; equality between them is simply False.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .interfaces import GroupOps


@dataclass(frozen=True, eq=False)
class _GroupPoint:
    raw: Any
    ops: GroupOps[Any] = field(repr=False)

    def _check_operand(self, other: object) -> "_GroupPoint":
        if type(other) is not type(self):
            raise TypeError(
                f"cannot combine {type(self).__name__} with {type(other).__name__}"
            )
        return other  # type: ignore[return-value]

    def __add__(self, other: object):
        other = self._check_operand(other)
        return type(self)(self.ops.add(self.raw, other.raw), self.ops)

    def __neg__(self):
        return type(self)(self.ops.neg(self.raw), self.ops)

    def __sub__(self, other: object):
        other = self._check_operand(other)
        return self + (-other)

    def __mul__(self, scalar: int):
        if not isinstance(scalar, int):
            return NotImplemented
        return type(self)(self.ops.scalar_mul(scalar, self.raw), self.ops)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.raw == other.raw  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.to_bytes()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{self.to_bytes().hex()[:16]}...)"

    def is_zero(self) -> bool:
        return self.raw == self.ops.zero()

    def to_bytes(self) -> bytes:
        return self.ops.encode(self.raw)


class G1Point(_GroupPoint):
    """Element of G1 (public keys)."""


class G2Point(_GroupPoint):
    """Element of G2 (signatures and hashed messages)."""


PublicKey = G1Point
AggregatePublicKey = G1Point
Signature = G2Point
AggregateSignature = G2Point
