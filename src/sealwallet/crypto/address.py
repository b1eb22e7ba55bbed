# src/sealwallet/crypto/address.py
import base58
from blake3 import blake3

from ..exceptions import AddressError
from ..utils.config import Config


class AddressCodec:
    """
    Account addresses: "A" followed by the base58check encoding of the
    BLAKE3-256 hash of the public key, version byte 0x00.
    """

    @staticmethod
    def hash_public_key(public_key: bytes) -> bytes:
        """BLAKE3-256 digest of a raw public key"""
        if len(public_key) != Config.PUBLIC_KEY_SIZE:
            raise ValueError(
                f"public key must be {Config.PUBLIC_KEY_SIZE} bytes, got {len(public_key)}"
            )
        return blake3(public_key).digest()

    @staticmethod
    def derive_address(public_key: bytes) -> str:
        """Derive the account address of a public key"""
        digest = AddressCodec.hash_public_key(public_key)

        # Version byte + hash, double SHA-256 checksum appended by b58encode_check
        versioned = bytes([Config.BASE58_VERSION]) + digest
        encoded = base58.b58encode_check(versioned).decode()

        return Config.ADDRESS_PREFIX + encoded

    @staticmethod
    def decode_address(address: str) -> bytes:
        """Recover the 32-byte public key hash embedded in an address"""
        if not address.startswith(Config.ADDRESS_PREFIX):
            raise AddressError(f"address must start with '{Config.ADDRESS_PREFIX}'")

        try:
            versioned = base58.b58decode_check(address[len(Config.ADDRESS_PREFIX):])
        except ValueError as e:
            raise AddressError(f"decoding address '{address}': {e}") from e

        if not versioned or versioned[0] != Config.BASE58_VERSION:
            raise AddressError(f"unexpected address version in '{address}'")

        digest = versioned[1:]
        if len(digest) != Config.ADDRESS_HASH_SIZE:
            raise AddressError(
                f"address hash must be {Config.ADDRESS_HASH_SIZE} bytes, got {len(digest)}"
            )
        return digest

    @staticmethod
    def is_valid_address(address: str) -> bool:
        try:
            AddressCodec.decode_address(address)
            return True
        except AddressError:
            return False
