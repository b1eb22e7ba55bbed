# src/sealwallet/wallet/wallet.py
from typing import Optional, Union

from ..crypto.keys import KeyPairGenerator, random_bytes
from ..exceptions import StorageError, WalletExistsError
from ..utils.config import Config
from ..utils.logger import get_logger
from .models import Wallet
from .protector import WalletProtector
from .store import LoadAllResult, WalletStore

logger = get_logger(__name__)

Password = Union[str, bytes]


class WalletManager:
    """Wallet lifecycle on top of a store: creation, unlocking, signing, rotation"""

    def __init__(
        self,
        store: WalletStore,
        protector: Optional[WalletProtector] = None,
        key_generator: Optional[KeyPairGenerator] = None
    ):
        self.store = store
        self.protector = protector or WalletProtector()
        self.key_generator = key_generator or KeyPairGenerator()

    def generate(self, nickname: str, password: Password, overwrite: bool = False) -> Wallet:
        """
        Create a wallet, seal its private key and persist it.

        Everything is freshly generated except the nickname. Nothing is
        written unless every step before saving succeeds; if the save itself
        fails the StorageError carries the sealed wallet in `.wallet`.
        """
        WalletStore.validate_nickname(nickname)

        with self.store.lock(nickname):
            if not overwrite and self.store.exists(nickname):
                raise WalletExistsError(f"wallet '{nickname}' already exists")

            public_key, private_key = self.key_generator.generate()
            salt = random_bytes(Config.SALT_SIZE)
            nonce = random_bytes(Config.NONCE_SIZE)

            wallet = Wallet.create(nickname, private_key, public_key, salt, nonce)
            sealed = self.protector.protect(wallet, password)

            try:
                self.store.save(sealed)
            except StorageError as e:
                logger.error(f"Persisting new wallet '{nickname}' failed: {e}")
                raise StorageError(f"persisting the new wallet: {e}", wallet=sealed) from e

        logger.info(f"Generated wallet '{nickname}' with address {sealed.address}")
        return sealed

    def get(self, nickname: str) -> Wallet:
        """Load a wallet in its sealed form"""
        return self.store.load(nickname)

    def list(self) -> LoadAllResult:
        return self.store.load_all()

    def delete(self, nickname: str):
        self.store.delete(nickname)

    def unlock(self, nickname: str, password: Password) -> Wallet:
        """Load a wallet and return a copy holding the plaintext private key"""
        return self.protector.unprotect(self.store.load(nickname), password)

    def sign(self, nickname: str, password: Password, message: bytes) -> bytes:
        """Sign a message with the private key of a wallet"""
        wallet = self.unlock(nickname, password)
        signature = self.key_generator.sign(wallet.key_pair.private_key, message)

        logger.info(f"Signed {len(message)} bytes with wallet '{nickname}'")
        return signature

    def change_password(self, nickname: str, old_password: Password, new_password: Password) -> Wallet:
        """Re-seal a stored wallet under a new password"""
        with self.store.lock(nickname):
            wallet = self.store.load(nickname)
            rotated = self.protector.rotate_password(wallet, old_password, new_password)
            self.store.save(rotated)
        return rotated
