"""Exception hierarchy for the BLS aggregation core."""
from __future__ import annotations


class BLSAggError(Exception):
    """Base exception for all errors raised by blsagg."""


class InvalidEncodingError(BLSAggError, ValueError):
    """Raised when bytes do not decode to a valid point of the expected group."""


class EmptyInputError(BLSAggError, ValueError):
    """Raised when aggregation is asked to combine zero elements."""


class EntropyUnavailableError(BLSAggError):
    """Raised when the secure random source cannot produce a secret key."""


class InvalidSecretKeyError(BLSAggError, ValueError):
    """Raised when a secret scalar is outside [1, r-1]."""


class ValidatorStateError(BLSAggError):
    """Raised when a validator or committee operation is requested in the wrong state."""


class ConfigurationError(BLSAggError):
    """Raised when settings loading or validation fails."""
