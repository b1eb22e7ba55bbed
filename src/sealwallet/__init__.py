"""Password-protected Ed25519 wallets stored as JSON files."""

from .crypto.address import AddressCodec
from .crypto.cipher import KeyDerivationCipher
from .crypto.keys import KeyPairGenerator
from .wallet.models import KeyPair, Wallet, WalletInfo
from .wallet.protector import WalletProtector
from .wallet.store import LoadAllResult, LoadFailure, LoadOutcome, WalletStore
from .wallet.wallet import WalletManager

__version__ = "0.1.0"

__all__ = [
    "AddressCodec",
    "KeyDerivationCipher",
    "KeyPair",
    "KeyPairGenerator",
    "LoadAllResult",
    "LoadFailure",
    "LoadOutcome",
    "Wallet",
    "WalletInfo",
    "WalletManager",
    "WalletProtector",
    "WalletStore",
]
