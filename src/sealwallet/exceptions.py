# src/sealwallet/exceptions.py

class WalletError(Exception):
    """Base exception class for wallet-related errors"""
    pass

class EntropyError(WalletError):
    """Raised when the secure random source is unavailable"""
    pass

class CryptoError(WalletError):
    """Base exception class for cryptographic primitive failures"""
    pass

class KeyDerivationError(CryptoError):
    """Raised when the password-based key derivation fails"""
    pass

class CipherInitError(CryptoError):
    """Raised when the AEAD cipher cannot be constructed"""
    pass

class KeyStateError(CryptoError):
    """Raised when a private key is not in the representation an operation expects"""
    pass

class AuthenticationError(CryptoError):
    """Raised when a sealed private key cannot be opened.

    Covers both a wrong password and a tampered or corrupted ciphertext;
    the two cases are deliberately indistinguishable.
    """
    pass

class AddressError(WalletError):
    """Raised when an address cannot be decoded"""
    pass

class SerializationError(WalletError):
    """Raised when a wallet cannot be encoded for storage"""
    pass

class ParseError(WalletError):
    """Raised when stored content is not a well-formed wallet record"""
    pass

class InvalidNicknameError(WalletError):
    """Raised when a nickname cannot be used as a store key"""
    pass

class StorageError(WalletError):
    """Raised when filesystem operations on the wallet store fail"""

    def __init__(self, message: str, wallet=None):
        super().__init__(message)
        # Sealed in-memory wallet when a save failed after protection
        self.wallet = wallet

class WalletNotFoundError(StorageError):
    """Raised when no wallet file exists for a nickname"""
    pass

class WalletExistsError(StorageError):
    """Raised when creating a wallet whose nickname is already taken"""
    pass
