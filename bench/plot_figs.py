from __future__ import annotations

import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.patches import Patch

plt.rcParams.update({
    "font.size": 11,
    "axes.titlesize": 12,
    "axes.labelsize": 11,
    "legend.fontsize": 10,
})

SUMMARY_PATH = "bench/outputs/summary.csv"
OUT_DIR = "bench/figures"

OP_ORDER = ["KeyGen", "Sign", "Aggregate", "Verify", "VerifyAll", "VerifyAggregated"]
HATCHES = {"VerifyAll": "///", "VerifyAggregated": "xx"}


def ns_to_ms(ns: float) -> float:
    return ns / 1e6


def _load_summary() -> pd.DataFrame:
    df = pd.read_csv(SUMMARY_PATH)
    df["op"] = pd.Categorical(df["op"], categories=OP_ORDER, ordered=True)
    df["mean_ms"] = df["mean_ns"].apply(ns_to_ms)
    df["p95_ms"] = df["p95_ns"].apply(ns_to_ms)
    return df.sort_values(["n_signers", "op"])


def _save(fig, stem: str) -> None:
    os.makedirs(OUT_DIR, exist_ok=True)
    pdf_path = os.path.join(OUT_DIR, f"{stem}.pdf")
    png_path = os.path.join(OUT_DIR, f"{stem}.png")
    fig.savefig(pdf_path)
    fig.savefig(png_path, dpi=300)
    plt.close(fig)
    print(f"[{stem}] Saved to {pdf_path} and {png_path}")


def plot_fig1_op_latency():
    """Mean latency of each per-signer operation at the smallest committee size."""
    df = _load_summary()
    n_min = int(df["n_signers"].min())
    sub = df[(df["n_signers"] == n_min) & df["op"].isin(["KeyGen", "Sign", "Aggregate", "Verify"])]

    fig, ax = plt.subplots(figsize=(6.0, 3.6))
    ax.bar(sub["op"].astype(str), sub["mean_ms"], color="white", edgecolor="black", hatch="//")
    ax.set_ylabel("Latency (ms)")
    ax.set_title(f"BLS12-381 Operation Latency (mean, n={n_min})")
    ax.grid(axis="y", linestyle="--", linewidth=0.5, alpha=0.7)
    fig.tight_layout()
    _save(fig, "fig1_op_latency")


def plot_fig2_verification_scaling():
    """Verifying n signatures one by one vs. one aggregated check."""
    df = _load_summary()
    pivot = df[df["op"].isin(["VerifyAll", "VerifyAggregated"])].pivot(
        index="n_signers", columns="op", values="mean_ms"
    )
    pivot = pivot[["VerifyAll", "VerifyAggregated"]]

    fig, ax = plt.subplots(figsize=(6.5, 3.8))
    pivot.plot(kind="bar", ax=ax, width=0.75, color="white", edgecolor="black")
    for cont, col in zip(ax.containers, pivot.columns):
        for p in cont.patches:
            p.set_hatch(HATCHES[col])
    handles = [
        Patch(facecolor="white", edgecolor="black", hatch=HATCHES[c], label=c) for c in pivot.columns
    ]
    ax.legend(handles=handles, frameon=False)
    ax.set_xlabel("Signers")
    ax.set_ylabel("Latency (ms)")
    ax.set_title("Individual vs Aggregated Verification (mean)")
    ax.grid(axis="y", linestyle="--", linewidth=0.5, alpha=0.7)
    fig.tight_layout()
    _save(fig, "fig2_verification_scaling")


def plot_fig3_signature_footprint():
    """Model: n x 96 bytes of individual signatures vs one 96-byte aggregate."""
    df = _load_summary()
    agg_bytes = float(df["aggregated_sig_bytes"].iloc[0])
    signers = np.array([1, 10, 100, 1000, 10000], dtype=float)

    fig, ax = plt.subplots(figsize=(6.5, 3.8))
    ax.plot(signers, signers * agg_bytes, linestyle="--", marker="s",
            markerfacecolor="none", markeredgecolor="black", color="black", label="individual")
    ax.plot(signers, np.full_like(signers, agg_bytes), linestyle="-", marker="o",
            markerfacecolor="none", markeredgecolor="black", color="black", label="aggregated")
    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Signers")
    ax.set_ylabel("Signature bytes")
    ax.set_title("Signature Footprint")
    ax.legend(frameon=False)
    ax.grid(True, which="both", linestyle="--", linewidth=0.5, alpha=0.7)
    fig.tight_layout()
    _save(fig, "fig3_signature_footprint")


def main():
    plot_fig1_op_latency()
    plot_fig2_verification_scaling()
    plot_fig3_signature_footprint()


if __name__ == "__main__":
    main()
