# src/sealwallet/utils/config.py

class Config:
    # Wallet record format
    WALLET_VERSION = 0

    # Key material sizes (bytes)
    PUBLIC_KEY_SIZE = 32
    PRIVATE_KEY_SIZE = 64  # Ed25519 seed followed by the public key
    SEED_SIZE = 32

    # Password-based encryption
    PBKDF2_ITERATIONS = 10000
    SECRET_KEY_SIZE = 32  # AES-256
    SALT_SIZE = 12
    NONCE_SIZE = 12
    TAG_SIZE = 16
    SEALED_PRIVATE_KEY_SIZE = PRIVATE_KEY_SIZE + TAG_SIZE

    # Address encoding
    ADDRESS_PREFIX = "A"
    BASE58_VERSION = 0x00
    ADDRESS_HASH_SIZE = 32

    # Store layout
    WALLET_FILE_PREFIX = "wallet_"
    WALLET_FILE_SUFFIX = ".json"
    WALLET_FILE_MODE = 0o600
    DEFAULT_STORE_ROOT = "."
