"""Deterministic keys and fingerprints.

Both are SHA-256 hex digests, so they are stable across processes and
Python versions.
"""

import hashlib


def hash_string(value: str) -> str:
    """SHA-256 hex digest of a UTF-8 string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def compute_post_key(source_name: str, post_id: str) -> str:
    """Identity of a post across sources.

    The source name is case-folded; the post id is kept as given because
    listing ids are case-sensitive.

    Example:
        >>> compute_post_key("BESalary", "1abcde") == compute_post_key("besalary ", "1abcde")
        True
    """
    return hash_string(f"{source_name.strip().lower()}:{post_id.strip()}")


def compute_record_fingerprint(canonical_json: str) -> str:
    """Fingerprint of a canonical record's JSON serialization."""
    return hash_string(canonical_json)
