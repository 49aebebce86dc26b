"""Hash calculation utilities"""

import hashlib

SUPPORTED_ALGORITHMS = ("sha1", "md5", "sha256")


def hash_text(value: str, algorithm: str = "sha256") -> str:
    """
    Calculate the hex digest of a string

    Args:
        value: Text to hash (UTF-8 encoded)
        algorithm: One of ``sha1``, ``md5`` or ``sha256``

    Returns:
        Hex digest string
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    hash_func = hashlib.new(algorithm)
    hash_func.update(str(value).encode("utf-8"))
    return hash_func.hexdigest()
