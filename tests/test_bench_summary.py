from __future__ import annotations

import pytest

from bench.aggregate import Row, _percentile, summarize_rows
from bench.run_bench import _check_outcome


def _row(op: str, n: int, ns: int, warmup: int = 0) -> Row:
    return Row("bls12-381", n, op, warmup, 0, ns, n * 96, 96)


def test_percentile_nearest_rank():
    vals = list(range(1, 101))
    assert _percentile(vals, 0.95) == 95
    assert _percentile(vals, 0.0) == 1
    assert _percentile(vals, 1.0) == 100


def test_summary_groups_by_size_and_op():
    rows = [
        _row("Verify", 2, 10),
        _row("Verify", 2, 30),
        _row("VerifyAggregated", 2, 12),
        _row("Verify", 4, 11),
    ]
    summary = summarize_rows(rows)
    assert [(s["n_signers"], s["op"]) for s in summary] == [
        (2, "Verify"),
        (2, "VerifyAggregated"),
        (4, "Verify"),
    ]
    first = summary[0]
    assert (first["n"], first["mean_ns"], first["median_ns"]) == (2, 20, 20)
    assert (first["individual_sig_bytes"], first["aggregated_sig_bytes"]) == (192, 96)


def test_failed_verification_stops_the_benchmark():
    _check_outcome(4, 0, True, True)
    with pytest.raises(RuntimeError, match="individual"):
        _check_outcome(4, 0, False, True)
    with pytest.raises(RuntimeError, match="aggregated"):
        _check_outcome(4, 1, True, False)
