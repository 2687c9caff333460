"""
Sealing and hashing of values.

Secrets are sealed with a libsodium sealed box against the secret store's
curve25519 public key. Audit records carry a short PBKDF2 digest of the
plaintext instead of the value itself.
"""

import base64

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from nacl import encoding, public

# https://cheatsheetseries.owasp.org/cheatsheets/Password_Storage_Cheat_Sheet.html#pbkdf2
HASH_ITERATIONS = 210000
HASH_LENGTH = 5


def seal(plaintext: str, public_key: str) -> str:
    """
    Seal a value for a secret store.

    Args:
        plaintext: The secret value
        public_key: Base64-encoded curve25519 public key

    Returns:
        Base64-encoded sealed-box ciphertext
    """
    key = public.PublicKey(public_key.encode("utf-8"), encoding.Base64Encoder())
    sealed = public.SealedBox(key).encrypt(plaintext.encode("utf-8"))
    return base64.b64encode(sealed).decode("utf-8")


def hash_value(value: str, salt: str) -> str:
    """
    One-way digest for audit logs; deterministic for a value and salt.

    Args:
        value: Plaintext value
        salt: Salt mixed into the digest

    Returns:
        Hex digest, HASH_LENGTH bytes long
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=HASH_LENGTH,
        salt=salt.encode("utf-8"),
        iterations=HASH_ITERATIONS,
    )
    return kdf.derive(value.encode("utf-8")).hex()
