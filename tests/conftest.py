"""Shared pytest fixtures: the real BLS12-381 suite and a fast toy pairing suite."""
from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass

import pytest

from blsagg.core import Params
from blsagg.errors import InvalidEncodingError
from instantiations.bls import make_bls_params

# Toy bilinear group: G1 = G2 = GT = (Z_q, +), e(a, b) = a*b mod q.
# Completely insecure, but bilinear, which is all the generic core relies on.
Q = 2**127 - 1


@dataclass(frozen=True)
class ToyGroupOps:
    name: str
    size: int
    gen: int

    def zero(self) -> int:
        return 0

    def generator(self) -> int:
        return self.gen

    def add(self, left: int, right: int) -> int:
        return (left + right) % Q

    def neg(self, value: int) -> int:
        return (-value) % Q

    def scalar_mul(self, scalar: int, value: int) -> int:
        return (scalar * value) % Q

    def encode(self, value: int) -> bytes:
        return value.to_bytes(self.size, "big")

    def decode(self, data: bytes) -> int:
        if len(data) != self.size:
            raise InvalidEncodingError(f"{self.name} encoding must be {self.size} bytes")
        value = int.from_bytes(data, "big")
        if value >= Q:
            raise InvalidEncodingError(f"{self.name} element out of range")
        return value


@dataclass(frozen=True)
class ToyPairing:
    def pair(self, p: int, q: int) -> int:
        return (p * q) % Q

    def product_is_one(self, pairs) -> bool:
        # GT is written additively here, so the identity is 0.
        return sum(p * q for p, q in pairs) % Q == 0

    def gt_to_bytes(self, value: int) -> bytes:
        return value.to_bytes(16, "big")


def toy_hash_to_G2(message: bytes, dst: bytes) -> int:
    return int.from_bytes(hashlib.sha256(dst + b"|" + message).digest(), "big") % Q


def toy_sample() -> int:
    return secrets.randbelow(Q - 1) + 1


def make_toy_params() -> Params:
    return Params(
        order=Q,
        G1_ops=ToyGroupOps(name="G1", size=48, gen=5),
        G2_ops=ToyGroupOps(name="G2", size=96, gen=7),
        pairing=ToyPairing(),
        hash_to_G2=toy_hash_to_G2,
        sample_scalar=toy_sample,
        dst=b"TOY_BLS_SIG_",
    )


@pytest.fixture()
def toy_params() -> Params:
    return make_toy_params()


@pytest.fixture(scope="session")
def bls_params() -> Params:
    return make_bls_params()
