# src/instantiations/bls/inst.py
from __future__ import annotations

import hashlib
import secrets
from dataclasses import dataclass
from typing import Callable, Iterable, Tuple

from blsagg.core import Params
from blsagg.errors import InvalidEncodingError

# py_ecc for BLS12-381 group ops, pairing, hash-to-curve and point compression.
# Install: pip install py-ecc
try:
    from py_ecc.bls.hash_to_curve import hash_to_G2 as _py_ecc_hash_to_G2
    from py_ecc.bls.point_compression import (
        compress_G1,
        compress_G2,
        decompress_G1,
        decompress_G2,
    )
    from py_ecc.optimized_bls12_381 import (
        FQ12,
        G1,
        G2,
        Z1,
        Z2,
        add,
        curve_order,
        final_exponentiate,
        is_inf,
        multiply,
        neg,
        normalize,
        pairing,
    )
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "BLS12-381 instantiation requires 'py-ecc'. Install via: pip install py-ecc"
    ) from e


# IETF BLS signature draft, basic scheme, signatures in G2.
DST_G2_BASIC = b"BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_"

_FQ_LEN = 48  # bytes per base-field element


# ----------------------------
# Point representation note
# - py_ecc optimized arithmetic works on projective points (x, y, z).
# - The same point has many (x, y, z) triples, so results are rescaled to z = 1
#   (or the library's infinity constant) before leaving this module. That makes
#   tuple equality coincide with group equality, and the result is still a
#   valid input to add/neg/multiply/pairing.
# ----------------------------

def _canon(P, inf):
    if is_inf(P):
        return inf
    x, y = normalize(P)
    return (x, y, x.one())


def _in_subgroup(P) -> bool:
    return is_inf(multiply(P, curve_order))


# ----------------------------
# G1: public keys, 48-byte compressed
# ----------------------------

@dataclass(frozen=True)
class G1Ops:
    name = "G1"
    size = 48

    def zero(self):
        return Z1

    def generator(self):
        return G1

    def add(self, A, B):
        return _canon(add(A, B), Z1)

    def neg(self, A):
        return _canon(neg(A), Z1)

    def scalar_mul(self, k: int, A):
        return _canon(multiply(A, int(k) % curve_order), Z1)

    def encode(self, A) -> bytes:
        return int(compress_G1(A)).to_bytes(self.size, "big")

    def decode(self, data: bytes):
        if len(data) != self.size:
            raise InvalidEncodingError(f"G1 encoding must be {self.size} bytes")
        try:
            P = decompress_G1(int.from_bytes(data, "big"))
        except Exception as exc:
            raise InvalidEncodingError(f"not a G1 point: {exc}") from exc
        if not _in_subgroup(P):
            raise InvalidEncodingError("G1 point is not in the prime-order subgroup")
        return _canon(P, Z1)


# ----------------------------
# G2: signatures, 96-byte compressed (two 48-byte halves, c1 then c0)
# ----------------------------

@dataclass(frozen=True)
class G2Ops:
    name = "G2"
    size = 96

    def zero(self):
        return Z2

    def generator(self):
        return G2

    def add(self, A, B):
        return _canon(add(A, B), Z2)

    def neg(self, A):
        return _canon(neg(A), Z2)

    def scalar_mul(self, k: int, A):
        return _canon(multiply(A, int(k) % curve_order), Z2)

    def encode(self, A) -> bytes:
        z1, z2 = compress_G2(A)
        return int(z1).to_bytes(_FQ_LEN, "big") + int(z2).to_bytes(_FQ_LEN, "big")

    def decode(self, data: bytes):
        if len(data) != self.size:
            raise InvalidEncodingError(f"G2 encoding must be {self.size} bytes")
        z1 = int.from_bytes(data[:_FQ_LEN], "big")
        z2 = int.from_bytes(data[_FQ_LEN:], "big")
        try:
            P = decompress_G2((z1, z2))
        except Exception as exc:
            raise InvalidEncodingError(f"not a G2 point: {exc}") from exc
        if not _in_subgroup(P):
            raise InvalidEncodingError("G2 point is not in the prime-order subgroup")
        return _canon(P, Z2)


# ----------------------------
# Pairing e: G1 x G2 -> GT (Fp12). py_ecc takes (G2, G1) argument order.
# ----------------------------

@dataclass(frozen=True)
class PairingBLS12381:
    def pair(self, p, q):
        return pairing(q, p)

    def product_is_one(self, pairs: Iterable[Tuple[object, object]]) -> bool:
        acc = FQ12.one()
        for p, q in pairs:
            acc = acc * pairing(q, p, final_exponentiate=False)
        return final_exponentiate(acc) == FQ12.one()

    def gt_to_bytes(self, value) -> bytes:
        # coeffs are plain ints in the optimized field, FQ elsewhere
        return b"".join(
            int(getattr(c, "n", c)).to_bytes(_FQ_LEN, "big") for c in value.coeffs
        )


def make_hash_to_G2() -> Callable[[bytes, bytes], object]:
    def hash_to_G2(message: bytes, dst: bytes):
        return _canon(_py_ecc_hash_to_G2(message, dst, hashlib.sha256), Z2)
    return hash_to_G2


# ----------------------------
# Sampler for secret keys in Z_r^*
# ----------------------------

def make_sampler_zr(r: int) -> Callable[[], int]:
    def sample() -> int:
        return secrets.randbelow(r - 1) + 1
    return sample


def make_bls_params(dst: bytes = DST_G2_BASIC) -> Params:
    """
    Return Params for BLS12-381 with public keys in G1 and signatures in G2.

    - G1: 48-byte compressed public keys
    - G2: 96-byte compressed signatures
    - H: hash_to_G2 (SSWU, SHA-256 expand_message_xmd) under ``dst``
    """
    r = int(curve_order)
    return Params(
        order=r,
        G1_ops=G1Ops(),
        G2_ops=G2Ops(),
        pairing=PairingBLS12381(),
        hash_to_G2=make_hash_to_G2(),
        sample_scalar=make_sampler_zr(r),
        dst=dst,
    )
