"""Validator identities and a committee session signing one shared message."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from . import core
from .codec import PUBLIC_KEY_SIZE, SIGNATURE_SIZE, encode_signature
from .core import MessageLike, PairingCheckResult, Params, SecretKey
from .errors import ValidatorStateError
from .points import AggregateSignature, PublicKey, Signature
from .timing import measure_time

logger = logging.getLogger(__name__)


class Validator:
    """Holds at most one key pair and at most one signature.

    Re-keying discards the signature; so does signing a different message.
    ``on_change`` is called after every key or signature change.
    """

    def __init__(
        self, validator_id: int, on_change: Optional[Callable[[], None]] = None
    ) -> None:
        self.id = validator_id
        self.on_change = on_change
        self._secret_key: Optional[SecretKey] = None
        self.public_key: Optional[PublicKey] = None
        self.signature: Optional[Signature] = None
        self.signed_message: Optional[bytes] = None

    def __repr__(self) -> str:
        return (
            f"Validator(id={self.id}, has_keys={self.has_keys}, "
            f"has_signature={self.has_signature})"
        )

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    @property
    def has_keys(self) -> bool:
        return self._secret_key is not None

    @property
    def has_signature(self) -> bool:
        return self.signature is not None

    def generate_keys(self, params: Params) -> PublicKey:
        self._secret_key, self.public_key = core.generate_key_pair(params)
        self.clear_signature()
        logger.debug("validator %s generated a new key pair", self.id)
        return self.public_key

    def sign(self, params: Params, message: MessageLike) -> Signature:
        if self._secret_key is None:
            raise ValidatorStateError(f"validator {self.id} has no key pair")
        self.signature = core.sign(params, self._secret_key, message)
        self.signed_message = core.as_message(message)
        self._changed()
        logger.debug("validator %s signed %d-byte message", self.id, len(self.signed_message))
        return self.signature

    def clear_signature(self) -> None:
        self.signature = None
        self.signed_message = None
        self._changed()

    def discard(self) -> None:
        """Forget keys and signature (end of the validator session)."""
        self._secret_key = None
        self.public_key = None
        self.clear_signature()


@dataclass(frozen=True)
class VerificationReport:
    validator_id: Optional[int]  # None for the aggregate
    success: bool
    time_ms: float
    pairing: Optional[PairingCheckResult] = None


@dataclass(frozen=True)
class SizeStats:
    signatures: int
    individual_bytes: int
    aggregated_bytes: int

    @property
    def saved_bytes(self) -> int:
        return self.individual_bytes - self.aggregated_bytes


class Committee:
    """Ordered validators sharing one current message.

    Any key, signature or message change drops the stored aggregate, including
    changes made directly on a validator returned by ``validator()``.
    """

    def __init__(
        self,
        params: Params,
        size: int = 3,
        message: MessageLike = "Block #12345",
        min_signatures: int = 2,
    ) -> None:
        if size <= 0:
            raise ValueError("committee size must be positive")
        self.params = params
        self.validators: Tuple[Validator, ...] = tuple(
            Validator(i, on_change=self._invalidate) for i in range(1, size + 1)
        )
        self._message = core.as_message(message)
        self.min_signatures = min_signatures
        self.aggregate_signature: Optional[AggregateSignature] = None

    @property
    def message(self) -> bytes:
        return self._message

    def validator(self, validator_id: int) -> Validator:
        for v in self.validators:
            if v.id == validator_id:
                return v
        raise KeyError(f"unknown validator {validator_id}")

    def signers(self) -> List[Validator]:
        return [v for v in self.validators if v.has_keys and v.has_signature]

    def _invalidate(self) -> None:
        self.aggregate_signature = None

    def set_message(self, message: MessageLike) -> None:
        msg = core.as_message(message)
        if msg == self._message:
            return
        self._message = msg
        for v in self.validators:
            v.clear_signature()
        self._invalidate()

    def generate_keys(self, validator_id: int) -> PublicKey:
        return self.validator(validator_id).generate_keys(self.params)

    def generate_all_keys(self) -> None:
        for v in self.validators:
            self.generate_keys(v.id)

    def sign(self, validator_id: int, message: Optional[MessageLike] = None) -> Signature:
        """Sign the committee message, or ``message`` when one is given."""
        msg = self._message if message is None else message
        return self.validator(validator_id).sign(self.params, msg)

    def sign_all(self) -> None:
        for v in self.validators:
            if v.has_keys:
                self.sign(v.id)

    def aggregate(self) -> bytes:
        """Aggregate the signers' signatures and return the 96-byte encoding."""
        signers = self.signers()
        if len(signers) < self.min_signatures:
            raise ValidatorStateError(
                f"need at least {self.min_signatures} signatures, have {len(signers)}"
            )
        self.aggregate_signature = core.aggregate_signatures(
            self.params, [v.signature for v in signers]
        )
        logger.info("aggregated %d signatures into %d bytes", len(signers), SIGNATURE_SIZE)
        return encode_signature(self.aggregate_signature)

    def verify_individual(self, with_pairings: bool = True) -> List[VerificationReport]:
        """Verify each signer against the message that signer actually signed."""
        signers = self.signers()
        if not signers:
            raise ValidatorStateError("no signatures to verify")
        reports = []
        for v in signers:
            t = measure_time(core.verify, self.params, v.public_key, v.signed_message, v.signature)
            pairing = None
            if with_pairings:
                pairing = core.verify_with_pairings(
                    self.params, v.public_key, v.signed_message, v.signature
                )
            reports.append(VerificationReport(v.id, t.result, t.time_ms, pairing))
            logger.info(
                "validator %s signature %s (%.1f ms)",
                v.id,
                "valid" if t.result else "INVALID",
                t.time_ms,
            )
        return reports

    def verify_aggregated(self, with_pairings: bool = True) -> VerificationReport:
        if self.aggregate_signature is None:
            raise ValidatorStateError("no aggregate signature; call aggregate() first")
        public_keys = [v.public_key for v in self.signers()]
        t = measure_time(
            core.verify_aggregated,
            self.params,
            public_keys,
            self._message,
            self.aggregate_signature,
        )
        pairing = None
        if with_pairings:
            pairing = core.verify_aggregated_with_pairings(
                self.params, public_keys, self._message, self.aggregate_signature
            )
        logger.info(
            "aggregate signature over %d keys %s (%.1f ms)",
            len(public_keys),
            "valid" if t.result else "INVALID",
            t.time_ms,
        )
        return VerificationReport(None, t.result, t.time_ms, pairing)

    def size_stats(self) -> SizeStats:
        n = len(self.signers())
        return SizeStats(
            signatures=n,
            individual_bytes=n * SIGNATURE_SIZE,
            aggregated_bytes=SIGNATURE_SIZE if n else 0,
        )

    def public_key_bytes(self) -> int:
        return len(self.signers()) * PUBLIC_KEY_SIZE


def speedup(individual: List[VerificationReport], aggregated: VerificationReport) -> float:
    """Sum of individual verification times over the aggregated verification time."""
    total = sum(r.time_ms for r in individual)
    if aggregated.time_ms <= 0:
        return float("inf")
    return total / aggregated.time_ms
