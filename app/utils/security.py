"""
Password hashing for admin accounts.

Stored format: "<hex derived key>.<hex salt>".
- Key derivation: scrypt (memory-hard), 64-byte key.
- Salt: 16 random bytes rendered as 32 hex chars; the hex text itself is
  the scrypt salt input, so hashes made by older account scripts verify.
"""

import hashlib
import hmac
import logging
import secrets

logger = logging.getLogger(__name__)

KEY_LENGTH = 64
SALT_BYTES = 16

# scrypt cost parameters (N=16384, r=8, p=1 needs ~16 MiB)
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1


def _derive_key(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        maxmem=64 * 1024 * 1024,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    """
    Hash a plaintext password with a fresh random salt.

    Args:
        password: Plaintext password

    Returns:
        "<hex key>.<hex salt>"
    """
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive_key(password, salt).hex()}.{salt}"


def verify_password(password: str, stored: str) -> bool:
    """
    Check a plaintext password against a stored "<hash>.<salt>" value.

    Comparison is constant-time. A malformed stored value never matches.
    """
    if not stored or "." not in stored:
        return False

    hashed, salt = stored.rsplit(".", 1)
    try:
        expected = bytes.fromhex(hashed)
    except ValueError:
        logger.warning("Stored password hash is not valid hex")
        return False

    if len(expected) != KEY_LENGTH or not salt:
        return False

    return hmac.compare_digest(_derive_key(password, salt), expected)
