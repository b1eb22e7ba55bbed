# File: src/sealwallet/wallet/protector.py
from typing import Optional, Union

from cryptography.exceptions import InvalidTag

from ..crypto.cipher import KeyDerivationCipher
from ..crypto.keys import random_bytes
from ..exceptions import AuthenticationError, KeyStateError
from ..utils.config import Config
from ..utils.logger import get_logger
from .models import Wallet

logger = get_logger(__name__)

Password = Union[str, bytes]


class WalletProtector:
    """
    Seals and opens the private key of a wallet.

    The private key field has two representations, plaintext and sealed.
    `protect` moves from the first to the second and `unprotect` back; both
    return a new Wallet and leave their argument untouched.

    A wallet's nonce is fixed for the life of its salt, so a given plaintext
    must be sealed only once under it. Use `rotate_password` rather than
    calling `protect` again on an unprotected wallet with a new password.
    """

    def __init__(self, cipher: Optional[KeyDerivationCipher] = None):
        self.cipher = cipher or KeyDerivationCipher()

    def protect(self, wallet: Wallet, password: Password) -> Wallet:
        """Encrypt the plaintext private key with AES-GCM under the password"""
        self._expect_size(wallet, Config.PRIVATE_KEY_SIZE, "plaintext")
        aead = self.cipher.build_aead(password, wallet.key_pair.salt)

        sealed = aead.encrypt(wallet.key_pair.nonce, wallet.key_pair.private_key, None)

        logger.debug(f"Sealed private key of wallet '{wallet.nickname}'")
        return wallet.with_key_pair(private_key=sealed)

    def unprotect(self, wallet: Wallet, password: Password) -> Wallet:
        """Decrypt the sealed private key, failing on any tag mismatch"""
        self._expect_size(wallet, Config.SEALED_PRIVATE_KEY_SIZE, "sealed")
        aead = self.cipher.build_aead(password, wallet.key_pair.salt)

        try:
            plaintext = aead.decrypt(wallet.key_pair.nonce, wallet.key_pair.private_key, None)
        except InvalidTag:
            logger.warning(f"Failed to open private key seal of wallet '{wallet.nickname}'")
            raise AuthenticationError(
                f"opening the private key seal of wallet '{wallet.nickname}'"
            ) from None

        return wallet.with_key_pair(private_key=plaintext)

    def rotate_password(self, wallet: Wallet, old_password: Password, new_password: Password) -> Wallet:
        """Re-seal a sealed wallet under a new password with a fresh salt and nonce"""
        opened = self.unprotect(wallet, old_password)
        refreshed = opened.with_key_pair(
            salt=random_bytes(Config.SALT_SIZE),
            nonce=random_bytes(Config.NONCE_SIZE),
        )

        logger.info(f"Rotating password of wallet '{wallet.nickname}'")
        return self.protect(refreshed, new_password)

    @staticmethod
    def _expect_size(wallet: Wallet, size: int, state: str):
        actual = len(wallet.key_pair.private_key)
        if actual != size:
            raise KeyStateError(
                f"wallet '{wallet.nickname}' private key is {actual} bytes, "
                f"expected a {size}-byte {state} key"
            )
