# src/sealwallet/crypto/keys.py
import os
from typing import Tuple

from cryptography.exceptions import InternalError, InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from ..exceptions import EntropyError
from ..utils.config import Config


def random_bytes(size: int) -> bytes:
    """Draw `size` bytes from the operating system's secure random source"""
    try:
        return os.urandom(size)
    except (OSError, NotImplementedError) as e:
        raise EntropyError(f"reading {size} random bytes: {e}") from e


class KeyPairGenerator:
    """
    Ed25519 key material for wallets.

    Private keys are handled in their 64-byte expanded form: the 32-byte
    seed followed by the 32-byte public key.
    """

    @staticmethod
    def generate() -> Tuple[bytes, bytes]:
        """Generate a fresh (public_key, private_key) pair"""
        try:
            signing_key = Ed25519PrivateKey.generate()
        except (OSError, NotImplementedError, InternalError) as e:
            raise EntropyError(f"generating ed25519 key pair: {e}") from e

        seed = signing_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption()
        )
        public_key = signing_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )
        return public_key, seed + public_key

    @staticmethod
    def public_key_of(private_key: bytes) -> bytes:
        """Recompute the public key from a plaintext private key"""
        signing_key = KeyPairGenerator._signing_key(private_key)
        return signing_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw
        )

    @staticmethod
    def sign(private_key: bytes, message: bytes) -> bytes:
        """Sign a message with a plaintext private key"""
        return KeyPairGenerator._signing_key(private_key).sign(message)

    @staticmethod
    def verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
        """Verify an Ed25519 signature"""
        if len(public_key) != Config.PUBLIC_KEY_SIZE:
            return False
        try:
            Ed25519PublicKey.from_public_bytes(public_key).verify(signature, message)
            return True
        except InvalidSignature:
            return False

    @staticmethod
    def _signing_key(private_key: bytes) -> Ed25519PrivateKey:
        if len(private_key) != Config.PRIVATE_KEY_SIZE:
            raise ValueError(
                f"private key must be {Config.PRIVATE_KEY_SIZE} bytes, got {len(private_key)}"
            )
        return Ed25519PrivateKey.from_private_bytes(private_key[:Config.SEED_SIZE])
