"""BLS aggregate signatures over a pairing-friendly curve pair (G1, G2)."""

from .codec import (
    PUBLIC_KEY_SIZE,
    SIGNATURE_SIZE,
    bytes_to_hex,
    decode_public_key,
    decode_signature,
    encode_public_key,
    encode_signature,
    truncate_hex,
)
from .core import (
    PairingCheckResult,
    Params,
    SecretKey,
    aggregate_public_keys,
    aggregate_signatures,
    generate_key_pair,
    hash_message,
    public_key_of,
    sign,
    verify,
    verify_aggregated,
    verify_aggregated_with_pairings,
    verify_with_pairings,
)
from .errors import (
    BLSAggError,
    ConfigurationError,
    EmptyInputError,
    EntropyUnavailableError,
    InvalidEncodingError,
    InvalidSecretKeyError,
    ValidatorStateError,
)
from .points import G1Point, G2Point

__all__ = [
    "PUBLIC_KEY_SIZE",
    "SIGNATURE_SIZE",
    "BLSAggError",
    "ConfigurationError",
    "EmptyInputError",
    "EntropyUnavailableError",
    "G1Point",
    "G2Point",
    "InvalidEncodingError",
    "InvalidSecretKeyError",
    "PairingCheckResult",
    "Params",
    "SecretKey",
    "ValidatorStateError",
    "aggregate_public_keys",
    "aggregate_signatures",
    "bytes_to_hex",
    "decode_public_key",
    "decode_signature",
    "encode_public_key",
    "encode_signature",
    "generate_key_pair",
    "hash_message",
    "public_key_of",
    "sign",
    "truncate_hex",
    "verify",
    "verify_aggregated",
    "verify_aggregated_with_pairings",
    "verify_with_pairings",
]
