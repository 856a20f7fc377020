"""Utility functions for hashing and time handling."""

from .hashing import compute_post_key, compute_record_fingerprint, hash_string
from .timestamps import ensure_utc, format_timestamp, unix_to_timestamp, utc_now

__all__ = [
    # Hashing
    "compute_post_key",
    "compute_record_fingerprint",
    "hash_string",
    # Timestamps
    "ensure_utc",
    "format_timestamp",
    "unix_to_timestamp",
    "utc_now",
]
