"""Concrete curve-primitives providers for blsagg."""
