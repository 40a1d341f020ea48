"""BLS12-381 provider (public keys in G1, signatures in G2) backed by py_ecc."""

from .inst import DST_G2_BASIC, make_bls_params

__all__ = ["DST_G2_BASIC", "make_bls_params"]
