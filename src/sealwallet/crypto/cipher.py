# src/sealwallet/crypto/cipher.py
from typing import Union

from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..exceptions import CipherInitError, KeyDerivationError
from ..utils.config import Config


class KeyDerivationCipher:
    """
    Password-based AEAD construction.

    The secret key is derived with PBKDF2-HMAC-SHA256 (10000 rounds, 32 bytes)
    and used as an AES-256 key in Galois/Counter Mode with 12-byte nonces.
    Identical (password, salt) pairs always yield the same cipher.
    """

    @staticmethod
    def derive_key(password: Union[str, bytes], salt: bytes) -> bytes:
        """Stretch a password into a 32-byte secret key"""
        if len(salt) != Config.SALT_SIZE:
            raise ValueError(f"salt must be {Config.SALT_SIZE} bytes, got {len(salt)}")
        if isinstance(password, str):
            password = password.encode("utf-8")

        try:
            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=Config.SECRET_KEY_SIZE,
                salt=salt,
                iterations=Config.PBKDF2_ITERATIONS,
            )
            return kdf.derive(password)
        except (InternalError, UnsupportedAlgorithm) as e:
            raise KeyDerivationError(f"deriving secret key: {e}") from e

    @staticmethod
    def build_aead(password: Union[str, bytes], salt: bytes) -> AESGCM:
        """Build the AES-GCM cipher protecting a wallet"""
        secret_key = KeyDerivationCipher.derive_key(password, salt)

        try:
            return AESGCM(secret_key)
        except (ValueError, InternalError, UnsupportedAlgorithm) as e:
            raise CipherInitError(f"initializing AES-GCM cipher: {e}") from e
