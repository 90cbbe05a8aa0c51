"""Random keys and password hashing."""

from __future__ import annotations

import hashlib
import secrets

import bcrypt

SYMBOL = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
    "!@#$%^&*()-_=+,.?/:;{}[]`~"
)
LETTER = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


def generate_rand_string(length: int, charset: str) -> str:
    """Return *length* random characters from *charset*, free of modulo bias."""
    size = len(charset)
    if size < 2 or size > 256:
        raise ValueError("wrong charset length")
    if length < 0:
        raise ValueError("length must not be negative")
    max_byte = 255 - (256 % size)
    out: list[str] = []
    while len(out) < length:
        for byte in secrets.token_bytes(length + length // 4):
            if byte > max_byte:
                continue
            out.append(charset[byte % size])
            if len(out) == length:
                break
    return "".join(out)


def generate_random_key20() -> str:
    return generate_rand_string(20, SYMBOL)


def generate_random_key16() -> str:
    return generate_rand_string(16, SYMBOL)


def generate_random_key6() -> str:
    return generate_rand_string(6, LETTER)


def set_password(password: str, salt: str) -> str:
    """Derive a hex scrypt hash from a password and a salt."""
    key = hashlib.scrypt(
        password.encode(), salt=salt.encode(), n=16384, r=8, p=1, dklen=32
    )
    return key.hex()


def compare_hash_and_password(hashed: str, password: str) -> bool:
    """Check a password against a bcrypt hash; a malformed hash raises ValueError."""
    return bcrypt.checkpw(password.encode(), hashed.encode())