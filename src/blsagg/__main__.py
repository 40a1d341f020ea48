from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from blsagg import log
from blsagg.codec import bytes_to_hex, encode_public_key, encode_signature, truncate_hex
from blsagg.config import load_settings
from blsagg.errors import BLSAggError
from blsagg.validator import Committee, speedup
from instantiations.bls import make_bls_params

logger = logging.getLogger("blsagg.demo")


def _mark(ok: bool) -> str:
    return "OK  " if ok else "FAIL"


def run(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()

    ap = argparse.ArgumentParser(
        prog="python -m blsagg",
        description="BLS12-381 aggregate signature walk-through (keys in G1, signatures in G2).",
    )
    ap.add_argument("--validators", type=int, default=settings.committee.size)
    ap.add_argument("--message", type=str, default=settings.committee.message)
    ap.add_argument(
        "--tamper-message",
        type=str,
        default=None,
        help="Have the last validator sign this message instead (aggregate must fail).",
    )
    ap.add_argument("--show-pairings", action="store_true", help="Print truncated GT values")
    ap.add_argument("--log-level", type=str, default=settings.logging.level)
    args = ap.parse_args(argv)

    settings.logging.level = args.log_level
    log.configure(settings.logging)

    if args.validators < settings.committee.min_signatures:
        ap.error(f"--validators must be at least {settings.committee.min_signatures}")

    params = make_bls_params(dst=settings.suite.dst)
    committee = Committee(
        params,
        size=args.validators,
        message=args.message,
        min_signatures=settings.committee.min_signatures,
    )

    print(f"Message: {args.message!r}")
    committee.generate_all_keys()
    committee.sign_all()

    if args.tamper_message is not None:
        last = committee.validators[-1]
        committee.sign(last.id, args.tamper_message)
        print(f"Validator {last.id} signs {args.tamper_message!r} instead")

    for v in committee.validators:
        pk_hex = truncate_hex(bytes_to_hex(encode_public_key(v.public_key)))
        sig_hex = truncate_hex(bytes_to_hex(encode_signature(v.signature)))
        print(f"  validator {v.id}: pk={pk_hex} (48 B)  sig={sig_hex} (96 B)")

    individual = committee.verify_individual(with_pairings=args.show_pairings)
    print("Individual verification:")
    for r in individual:
        print(f"  [{_mark(r.success)}] validator {r.validator_id}  {r.time_ms:.1f} ms")
        if r.pairing is not None:
            print(f"         e(G1, sig) = {truncate_hex(r.pairing.lhs_hex, 24)}")
            print(f"         e(PK, H(m)) = {truncate_hex(r.pairing.rhs_hex, 24)}")

    agg_bytes = committee.aggregate()
    stats = committee.size_stats()
    print(f"Aggregate signature: {truncate_hex(bytes_to_hex(agg_bytes), 12)}")
    print(
        f"  size: {stats.signatures} x 96 = {stats.individual_bytes} B -> "
        f"{stats.aggregated_bytes} B (saved {stats.saved_bytes} B)"
    )

    aggregated = committee.verify_aggregated(with_pairings=args.show_pairings)
    print(f"Aggregated verification: [{_mark(aggregated.success)}]  {aggregated.time_ms:.1f} ms")
    if aggregated.pairing is not None:
        print(f"  e(G1, sig_agg) = {truncate_hex(aggregated.pairing.lhs_hex, 24)}")
        print(f"  e(PK_agg, H(m)) = {truncate_hex(aggregated.pairing.rhs_hex, 24)}")
    print(f"Speedup vs individual: {speedup(individual, aggregated):.1f}x")

    expected = args.tamper_message is None or args.tamper_message == args.message
    return 0 if aggregated.success == expected else 1


def main() -> None:
    try:
        code = run()
    except BLSAggError as exc:
        logger.error("%s", exc)
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    main()
