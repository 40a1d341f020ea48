from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Iterable, List, Tuple, TypeVar, Union

from .codec import BytesLike, bytes_to_hex, decode_public_key, decode_signature
from .errors import (
    EmptyInputError,
    EntropyUnavailableError,
    InvalidEncodingError,
    InvalidSecretKeyError,
)
from .interfaces import GroupOps, HashToG2, PairingOps, ScalarSampler
from .points import (
    AggregatePublicKey,
    AggregateSignature,
    G1Point,
    G2Point,
    PublicKey,
    Signature,
)

logger = logging.getLogger(__name__)

P1 = TypeVar("P1")
P2 = TypeVar("P2")
GT = TypeVar("GT")
PT = TypeVar("PT", G1Point, G2Point)

PublicKeyLike = Union[PublicKey, BytesLike]
SignatureLike = Union[Signature, BytesLike]
MessageLike = Union[bytes, bytearray, memoryview, str]


@dataclass(frozen=True)
class Params(Generic[P1, P2, GT]):
    """Curve constants and primitives the scheme is built on.

    Instances are immutable and shared freely between threads; the only
    stateful collaborator is ``sample_scalar``, which must be safe for
    concurrent use.
    """

    order: int  # r, order of G1, G2 and GT
    G1_ops: GroupOps[P1]
    G2_ops: GroupOps[P2]
    pairing: PairingOps[P1, P2, GT]
    hash_to_G2: HashToG2[P2]
    sample_scalar: ScalarSampler
    dst: bytes

    def g1_generator(self) -> G1Point:
        return G1Point(self.G1_ops.generator(), self.G1_ops)

    def g2_generator(self) -> G2Point:
        return G2Point(self.G2_ops.generator(), self.G2_ops)


@dataclass(frozen=True)
class SecretKey:
    """Scalar sk in [1, r-1]. Never serialized, never shown in repr."""

    scalar: int = field(repr=False)


@dataclass(frozen=True)
class PairingCheckResult(Generic[GT]):
    """Both sides of the verification identity, for display only.

    ``verify``/``verify_aggregated`` decide pass/fail; this is an observability
    artifact computed on a separate path.
    """

    lhs: GT  # e(G1, σ)
    rhs: GT  # e(PK, H(m))
    lhs_hex: str
    rhs_hex: str
    equal: bool


def _check_secret_key(params: Params, sk: SecretKey) -> int:
    if not isinstance(sk, SecretKey):
        raise TypeError(f"expected SecretKey, got {type(sk).__name__}")
    s = sk.scalar
    if not isinstance(s, int) or not 1 <= s < params.order:
        raise InvalidSecretKeyError("secret key must be an integer in [1, r-1]")
    return s


def as_message(message: MessageLike) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8")
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    raise TypeError(f"message must be bytes or str, got {type(message).__name__}")


def _as_public_key(params: Params, value: PublicKeyLike) -> PublicKey:
    if isinstance(value, G1Point):
        if value.is_zero():
            raise InvalidEncodingError("public key is the point at infinity")
        return value
    if isinstance(value, G2Point):
        raise TypeError("a G2 point cannot be used as a public key")
    return decode_public_key(params, value)


def _as_signature(params: Params, value: SignatureLike) -> Signature:
    if isinstance(value, G2Point):
        return value
    if isinstance(value, G1Point):
        raise TypeError("a G1 point cannot be used as a signature")
    return decode_signature(params, value)


def _sum(points: List[PT], what: str) -> PT:
    """Σ points under the group law. A single element is returned unchanged."""
    if not points:
        raise EmptyInputError(f"cannot aggregate zero {what}")
    acc = points[0]
    for p in points[1:]:
        acc = acc + p
    return acc


def generate_key_pair(params: Params) -> Tuple[SecretKey, PublicKey]:
    """KeyGen: sk ←$ [1, r-1]; PK := [sk]·G1."""
    try:
        s = params.sample_scalar()
    except (OSError, NotImplementedError) as exc:
        raise EntropyUnavailableError("secure random source is unavailable") from exc

    sk = SecretKey(s)
    _check_secret_key(params, sk)
    pk = s * params.g1_generator()
    logger.debug("generated key pair")
    return sk, pk


def public_key_of(params: Params, sk: SecretKey) -> PublicKey:
    """PK := [sk]·G1 for an existing secret key."""
    return _check_secret_key(params, sk) * params.g1_generator()


def hash_message(params: Params, message: MessageLike) -> G2Point:
    """H(m): domain-separated hash-to-curve onto G2."""
    msg = as_message(message)
    return G2Point(params.hash_to_G2(msg, params.dst), params.G2_ops)


def sign(params: Params, sk: SecretKey, message: MessageLike) -> Signature:
    """Sign: σ := [sk]·H(m). Deterministic in (sk, m)."""
    s = _check_secret_key(params, sk)
    h = hash_message(params, message)
    return s * h


def aggregate_signatures(
    params: Params, signatures: Iterable[SignatureLike]
) -> AggregateSignature:
    """σ_agg := Σ σ_i. Order of the inputs does not matter.

    No check is made that the inputs sign the same message, and duplicates are
    summed as given.
    """
    sigs = [_as_signature(params, s) for s in signatures]
    agg = _sum(sigs, "signatures")
    logger.debug("aggregated %d signature(s)", len(sigs))
    return agg


def aggregate_public_keys(
    params: Params, public_keys: Iterable[PublicKeyLike]
) -> AggregatePublicKey:
    """PK_agg := Σ PK_i."""
    pks = [_as_public_key(params, pk) for pk in public_keys]
    agg = _sum(pks, "public keys")
    logger.debug("aggregated %d public key(s)", len(pks))
    return agg


def _identity_holds(params: Params, pk: G1Point, h: G2Point, sig: G2Point) -> bool:
    # e(G1, σ) == e(PK, H(m))  <=>  e(G1, σ) · e(-PK, H(m)) == 1
    return params.pairing.product_is_one(
        [
            (params.G1_ops.generator(), sig.raw),
            (params.G1_ops.neg(pk.raw), h.raw),
        ]
    )


def verify(
    params: Params,
    public_key: PublicKeyLike,
    message: MessageLike,
    signature: SignatureLike,
) -> bool:
    """Verify: e(G1, σ) == e(PK, H(m)).

    Malformed encodings raise InvalidEncodingError; a well-formed but wrong
    signature returns False.
    """
    pk = _as_public_key(params, public_key)
    sig = _as_signature(params, signature)
    ok = _identity_holds(params, pk, hash_message(params, message), sig)
    logger.debug("single verification: %s", "pass" if ok else "fail")
    return ok


def verify_aggregated(
    params: Params,
    public_keys: Iterable[PublicKeyLike],
    message: MessageLike,
    aggregate_signature: SignatureLike,
) -> bool:
    """Verify: e(G1, σ_agg) == e(Σ PK_i, H(m)).

    Sound only when every signer signed the same message. There is no
    proof-of-possession check, so keys chosen adversarially relative to other
    signers' keys (rogue keys) can forge an aggregate.
    """
    pk_agg = aggregate_public_keys(params, public_keys)
    sig = _as_signature(params, aggregate_signature)
    ok = _identity_holds(params, pk_agg, hash_message(params, message), sig)
    logger.debug("aggregated verification: %s", "pass" if ok else "fail")
    return ok


def _pairing_check(
    params: Params, pk: G1Point, h: G2Point, sig: G2Point
) -> PairingCheckResult:
    lhs = params.pairing.pair(params.G1_ops.generator(), sig.raw)
    rhs = params.pairing.pair(pk.raw, h.raw)
    return PairingCheckResult(
        lhs=lhs,
        rhs=rhs,
        lhs_hex=bytes_to_hex(params.pairing.gt_to_bytes(lhs)),
        rhs_hex=bytes_to_hex(params.pairing.gt_to_bytes(rhs)),
        equal=lhs == rhs,
    )


def verify_with_pairings(
    params: Params,
    public_key: PublicKeyLike,
    message: MessageLike,
    signature: SignatureLike,
) -> PairingCheckResult:
    """Compute e(G1, σ) and e(PK, H(m)) separately, for display."""
    pk = _as_public_key(params, public_key)
    sig = _as_signature(params, signature)
    return _pairing_check(params, pk, hash_message(params, message), sig)


def verify_aggregated_with_pairings(
    params: Params,
    public_keys: Iterable[PublicKeyLike],
    message: MessageLike,
    aggregate_signature: SignatureLike,
) -> PairingCheckResult:
    """Compute e(G1, σ_agg) and e(Σ PK_i, H(m)) separately, for display."""
    pk_agg = aggregate_public_keys(params, public_keys)
    sig = _as_signature(params, aggregate_signature)
    return _pairing_check(params, pk_agg, hash_message(params, message), sig)
