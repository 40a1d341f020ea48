from __future__ import annotations

import pytest
from py_ecc.bls import G2Basic
from py_ecc.bls.point_compression import compress_G1
from py_ecc.optimized_bls12_381 import FQ, field_modulus

from blsagg.codec import (
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    decode_public_key,
    decode_signature,
    encode_public_key,
    encode_signature,
)
from blsagg.core import (
    aggregate_signatures,
    generate_key_pair,
    sign,
    verify,
    verify_aggregated,
    verify_with_pairings,
)
from blsagg.errors import InvalidEncodingError
from blsagg.points import G1Point, G2Point

MESSAGE = b"Block #12345"


@pytest.fixture(scope="module")
def validators(bls_params):
    """Three validators that each signed MESSAGE: [(sk, pk, sig), ...]."""
    out = []
    for _ in range(3):
        sk, pk = generate_key_pair(bls_params)
        out.append((sk, pk, sign(bls_params, sk, MESSAGE)))
    return out


def _rejected(fn) -> bool:
    try:
        return fn() is False
    except InvalidEncodingError:
        return True


def _flip(data: bytes, index: int) -> bytes:
    return data[:index] + bytes([data[index] ^ 0x01]) + data[index + 1:]


def test_encoding_sizes(validators):
    _sk, pk, sig = validators[0]
    assert len(encode_public_key(pk)) == PUBLIC_KEY_SIZE == 48
    assert len(encode_signature(sig)) == SIGNATURE_SIZE == 96


def test_encodings_decode_to_the_same_points(bls_params, validators):
    _sk, pk, sig = validators[0]
    assert decode_public_key(bls_params, encode_public_key(pk)) == pk
    assert decode_signature(bls_params, encode_signature(sig)) == sig


def test_matches_ietf_basic_ciphersuite(validators):
    sk, pk, sig = validators[0]
    assert encode_public_key(pk) == G2Basic.SkToPk(sk.scalar)
    assert encode_signature(sig) == G2Basic.Sign(sk.scalar, MESSAGE)


def test_three_validator_block_scenario(bls_params, validators):
    for _sk, pk, sig in validators:
        assert verify(bls_params, encode_public_key(pk), MESSAGE, encode_signature(sig))

    agg = aggregate_signatures(bls_params, [encode_signature(s) for _, _, s in validators])
    agg_bytes = encode_signature(agg)
    assert len(agg_bytes) == SIGNATURE_SIZE
    assert agg_bytes == G2Basic.Aggregate([encode_signature(s) for _, _, s in validators])

    public_keys = [encode_public_key(pk) for _, pk, _ in validators]
    assert verify_aggregated(bls_params, public_keys, MESSAGE, agg_bytes)


def test_one_validator_on_another_block_breaks_aggregate(bls_params, validators):
    sk3, pk3, _sig3 = validators[2]
    other = b"Block #12346"
    sig3 = sign(bls_params, sk3, other)
    assert verify(bls_params, pk3, other, sig3)

    sigs = [validators[0][2], validators[1][2], sig3]
    agg = aggregate_signatures(bls_params, sigs)
    public_keys = [pk for _, pk, _ in validators]
    assert verify_aggregated(bls_params, public_keys, MESSAGE, agg) is False


def test_wrong_message_fails(bls_params, validators):
    _sk, pk, sig = validators[0]
    assert verify(bls_params, pk, b"Block #12346", sig) is False


def test_aggregation_order_does_not_matter(bls_params, validators):
    sigs = [s for _, _, s in validators]
    forward = encode_signature(aggregate_signatures(bls_params, sigs))
    backward = encode_signature(aggregate_signatures(bls_params, sigs[::-1]))
    assert forward == backward


def test_tampered_aggregate_is_rejected(bls_params, validators):
    agg = encode_signature(aggregate_signatures(bls_params, [s for _, _, s in validators]))
    public_keys = [pk for _, pk, _ in validators]
    bad = _flip(agg, SIGNATURE_SIZE - 1)
    assert _rejected(lambda: verify_aggregated(bls_params, public_keys, MESSAGE, bad))


def test_tampered_public_key_is_rejected(bls_params, validators):
    agg = aggregate_signatures(bls_params, [s for _, _, s in validators])
    public_keys = [encode_public_key(pk) for _, pk, _ in validators]
    public_keys[0] = _flip(public_keys[0], PUBLIC_KEY_SIZE - 1)
    assert _rejected(lambda: verify_aggregated(bls_params, public_keys, MESSAGE, agg))


@pytest.mark.parametrize("length", [1, 47, 49, 96])
def test_public_key_length_is_checked(bls_params, length):
    with pytest.raises(InvalidEncodingError):
        decode_public_key(bls_params, b"\x80" + bytes(length - 1))


@pytest.mark.parametrize("length", [1, 48, 95, 97])
def test_signature_length_is_checked(bls_params, length):
    with pytest.raises(InvalidEncodingError):
        decode_signature(bls_params, b"\x80" + bytes(length - 1))


def test_missing_compression_flag_is_rejected(bls_params):
    with pytest.raises(InvalidEncodingError):
        decode_public_key(bls_params, bytes(48))
    with pytest.raises(InvalidEncodingError):
        decode_signature(bls_params, bytes(96))


def test_infinity_public_key_is_rejected(bls_params):
    with pytest.raises(InvalidEncodingError):
        decode_public_key(bls_params, b"\xc0" + bytes(47))


def test_point_outside_subgroup_is_rejected(bls_params):
    # First x with a square root of x^3 + 4; almost surely not in the r-torsion.
    p = field_modulus
    x = 1
    while True:
        rhs = (x**3 + 4) % p
        y = pow(rhs, (p + 1) // 4, p)
        if y * y % p == rhs:
            break
        x += 1
    encoded = int(compress_G1((FQ(x), FQ(y), FQ(1)))).to_bytes(48, "big")
    with pytest.raises(InvalidEncodingError):
        decode_public_key(bls_params, encoded)


def test_pairing_values_are_exposed(bls_params, validators):
    _sk, pk, sig = validators[0]
    result = verify_with_pairings(bls_params, pk, MESSAGE, sig)
    assert result.equal
    assert result.lhs_hex == result.rhs_hex
    # 12 Fp coefficients of 48 bytes each
    assert len(result.lhs_hex) == 2 + 2 * 12 * 48


def test_identity_point_never_verifies(bls_params):
    zero_pk = G1Point(bls_params.G1_ops.zero(), bls_params.G1_ops)
    zero_sig = G2Point(bls_params.G2_ops.zero(), bls_params.G2_ops)
    with pytest.raises(InvalidEncodingError):
        verify(bls_params, zero_pk, b"anything", zero_sig)
