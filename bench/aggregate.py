from __future__ import annotations

import argparse
import csv
import glob
import math
import os
from dataclasses import dataclass
from typing import Dict, List, Tuple

_REQUIRED = {
    "scheme",
    "n_signers",
    "op",
    "warmup",
    "rep",
    "elapsed_ns",
    "individual_sig_bytes",
    "aggregated_sig_bytes",
}


@dataclass(frozen=True)
class Row:
    scheme: str
    n_signers: int
    op: str
    warmup: int
    rep: int
    elapsed_ns: int
    individual_sig_bytes: int
    aggregated_sig_bytes: int


def _read_rows(paths: List[str]) -> List[Row]:
    rows: List[Row] = []
    for p in paths:
        with open(p, "r", newline="") as f:
            r = csv.DictReader(f)
            missing = _REQUIRED - set(r.fieldnames or [])
            if missing:
                raise ValueError(f"{p}: missing columns {sorted(missing)}")
            for d in r:
                rows.append(
                    Row(
                        scheme=str(d["scheme"]),
                        n_signers=int(d["n_signers"]),
                        op=str(d["op"]),
                        warmup=int(d["warmup"]),
                        rep=int(d["rep"]),
                        elapsed_ns=int(d["elapsed_ns"]),
                        individual_sig_bytes=int(d["individual_sig_bytes"]),
                        aggregated_sig_bytes=int(d["aggregated_sig_bytes"]),
                    )
                )
    return rows


def _percentile(sorted_vals: List[int], q: float) -> int:
    """Nearest-rank percentile, q in [0, 1]."""
    if not sorted_vals:
        raise ValueError("empty values")
    k = math.ceil(q * len(sorted_vals)) - 1
    return sorted_vals[max(0, min(k, len(sorted_vals) - 1))]


def _summarize(vals: List[int]) -> Dict[str, int]:
    s = sorted(vals)
    n = len(s)
    median = s[n // 2] if n % 2 == 1 else int(round((s[n // 2 - 1] + s[n // 2]) / 2))
    return {
        "n": n,
        "mean_ns": int(round(sum(s) / n)),
        "median_ns": median,
        "p95_ns": _percentile(s, 0.95),
        "p99_ns": _percentile(s, 0.99),
        "min_ns": s[0],
        "max_ns": s[-1],
    }


def summarize_rows(rows: List[Row]) -> List[dict]:
    groups: Dict[Tuple[str, int, str], List[Row]] = {}
    for x in rows:
        groups.setdefault((x.scheme, x.n_signers, x.op), []).append(x)

    out = []
    for (scheme, n_signers, op), rs in sorted(groups.items()):
        out.append(
            {
                "scheme": scheme,
                "n_signers": n_signers,
                "op": op,
                **_summarize([r.elapsed_ns for r in rs]),
                "individual_sig_bytes": rs[0].individual_sig_bytes,
                "aggregated_sig_bytes": rs[0].aggregated_sig_bytes,
            }
        )
    return out


def main() -> None:
    ap = argparse.ArgumentParser(description="Summarize raw benchmark CSVs per (committee size, op).")
    ap.add_argument("--in", dest="inputs", nargs="*", default=None, help="Input CSV files.")
    ap.add_argument("--glob", dest="globpat", default="bench/outputs/out*.csv")
    ap.add_argument("--out", dest="out", default="bench/outputs/summary.csv")
    ap.add_argument("--include-warmup", action="store_true", help="Include warmup rows.")
    args = ap.parse_args()

    paths = args.inputs if args.inputs else sorted(glob.glob(args.globpat))
    if not paths:
        raise SystemExit(f"No input CSVs found (inputs={args.inputs}, glob={args.globpat}).")

    rows = _read_rows(paths)
    if not args.include_warmup:
        rows = [x for x in rows if x.warmup == 0]
    summary = summarize_rows(rows)
    if not summary:
        raise SystemExit("No rows left to summarize.")

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    with open(args.out, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(summary[0].keys()))
        w.writeheader()
        w.writerows(summary)

    print(f"Wrote: {args.out}")
    print(f"Inputs: {len(paths)} file(s); rows used: {len(rows)}; groups: {len(summary)}")


if __name__ == "__main__":
    main()
