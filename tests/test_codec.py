from __future__ import annotations

import pytest

from blsagg.codec import (
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    bytes_to_hex,
    decode_public_key,
    decode_signature,
    encode_public_key,
    encode_signature,
    truncate_hex,
)
from blsagg.core import generate_key_pair, sign
from blsagg.errors import InvalidEncodingError


def test_sizes():
    assert PUBLIC_KEY_SIZE == 48
    assert SIGNATURE_SIZE == 96


def test_encode_rejects_the_other_group(toy_params):
    sk, pk = generate_key_pair(toy_params)
    sig = sign(toy_params, sk, b"m")
    with pytest.raises(TypeError):
        encode_public_key(sig)
    with pytest.raises(TypeError):
        encode_signature(pk)


def test_decode_accepts_bytearray_and_memoryview(toy_params):
    sk, pk = generate_key_pair(toy_params)
    pk_bytes = encode_public_key(pk)
    sig_bytes = encode_signature(sign(toy_params, sk, b"m"))
    assert decode_public_key(toy_params, bytearray(pk_bytes)) == pk
    assert decode_signature(toy_params, memoryview(sig_bytes)).to_bytes() == sig_bytes


def test_decode_rejects_non_bytes(toy_params):
    with pytest.raises(TypeError):
        decode_public_key(toy_params, "00" * 48)


def test_invalid_encoding_error_is_a_value_error(toy_params):
    with pytest.raises(ValueError):
        decode_signature(toy_params, b"short")


def test_bytes_to_hex():
    assert bytes_to_hex(b"\x00\xab") == "0x00ab"
    assert bytes_to_hex(b"") == "0x"


def test_truncate_hex():
    h = "0x" + "ab" * 48
    assert truncate_hex(h) == "0xabababab...abababab"
    assert truncate_hex(h, 4) == "0xabab...abab"
    assert truncate_hex("0x1234") == "0x1234"
