"""Hash utilities for ugit."""

import hashlib

OID_LENGTH = 64
HEX_DIGITS = frozenset('0123456789abcdef')


def hash_object(data: bytes) -> str:
    """
    Compute SHA-256 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        64-character hex string
    """
    return hashlib.sha256(data).hexdigest()


def frame(kind: str, data: bytes) -> bytes:
    """Prefix content with the '<kind> <size>\\0' header that gets hashed and stored."""
    return f"{kind} {len(data)}\0".encode() + data


def is_hex(value: str) -> bool:
    """Check whether a string could be an OID or an OID prefix."""
    return bool(value) and all(c in HEX_DIGITS for c in value.lower())
