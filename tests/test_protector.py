# tests/test_protector.py
import pytest
from sealwallet.crypto.keys import KeyPairGenerator, random_bytes
from sealwallet.wallet.models import Wallet
from sealwallet.wallet.protector import WalletProtector
from pydantic import ValidationError
from sealwallet.exceptions import AuthenticationError, KeyStateError

class TestWalletProtector:
    @pytest.fixture
    def protector(self):
        return WalletProtector()

    @pytest.fixture
    def wallet(self):
        """Create a plaintext wallet"""
        public_key, private_key = KeyPairGenerator.generate()
        return Wallet.create("alice", private_key, public_key, random_bytes(12), random_bytes(12))

    @pytest.fixture
    def sealed(self, protector, wallet):
        return protector.protect(wallet, "pw1")

    def test_protect_seals_private_key(self, wallet, sealed):
        assert len(sealed.key_pair.private_key) == 64 + 16
        assert sealed.key_pair.private_key != wallet.key_pair.private_key
        assert sealed.key_pair.public_key == wallet.key_pair.public_key
        assert sealed.key_pair.salt == wallet.key_pair.salt
        assert sealed.key_pair.nonce == wallet.key_pair.nonce
        assert sealed.address == wallet.address

    def test_protect_does_not_mutate_input(self, protector, wallet):
        original = wallet.key_pair.private_key
        protector.protect(wallet, "pw1")
        assert wallet.key_pair.private_key == original

    def test_round_trip(self, protector, wallet, sealed):
        """Test unprotecting with the right password recovers the key"""
        opened = protector.unprotect(sealed, "pw1")
        assert opened.key_pair.private_key == wallet.key_pair.private_key
        assert opened == wallet

    @pytest.mark.parametrize("password", ["pw", "pässwörd", "x" * 200, b"\x00\xffraw"])
    def test_round_trip_passwords(self, protector, wallet, password):
        opened = protector.unprotect(protector.protect(wallet, password), password)
        assert opened.key_pair.private_key == wallet.key_pair.private_key

    def test_wrong_password(self, protector, sealed):
        """Test a wrong password fails authentication"""
        with pytest.raises(AuthenticationError):
            protector.unprotect(sealed, "pw2")

    @pytest.mark.parametrize("index", [0, 1, 31, 63, 64, 79])
    def test_tampered_ciphertext(self, protector, sealed, index):
        """Test flipping a bit of the sealed key fails authentication"""
        tampered_key = bytearray(sealed.key_pair.private_key)
        tampered_key[index] ^= 0x01
        tampered = sealed.with_key_pair(private_key=bytes(tampered_key))

        with pytest.raises(AuthenticationError):
            protector.unprotect(tampered, "pw1")

    def test_tampered_nonce(self, protector, sealed):
        nonce = bytearray(sealed.key_pair.nonce)
        nonce[0] ^= 0x80
        with pytest.raises(AuthenticationError):
            protector.unprotect(sealed.with_key_pair(nonce=bytes(nonce)), "pw1")

    def test_same_password_different_salt(self, protector, wallet):
        """Test identical passwords on different salts seal differently"""
        other = wallet.with_key_pair(salt=random_bytes(12))
        assert protector.protect(wallet, "pw1").key_pair.private_key != \
            protector.protect(other, "pw1").key_pair.private_key

    def test_rotate_password(self, protector, wallet, sealed):
        rotated = protector.rotate_password(sealed, "pw1", "pw2")

        assert rotated.key_pair.nonce != sealed.key_pair.nonce
        assert rotated.key_pair.salt != sealed.key_pair.salt
        assert rotated.address == sealed.address

        opened = protector.unprotect(rotated, "pw2")
        assert opened.key_pair.private_key == wallet.key_pair.private_key
        with pytest.raises(AuthenticationError):
            protector.unprotect(rotated, "pw1")

    def test_rotate_password_requires_old_password(self, protector, sealed):
        with pytest.raises(AuthenticationError):
            protector.rotate_password(sealed, "wrong", "pw2")

    def test_protect_rejects_sealed_wallet(self, protector, sealed):
        """Test sealing twice under the same nonce is refused"""
        with pytest.raises(KeyStateError):
            protector.protect(sealed, "pw1")

    def test_unprotect_rejects_plaintext_wallet(self, protector, wallet):
        with pytest.raises(KeyStateError):
            protector.unprotect(wallet, "pw1")

    def test_with_key_pair_revalidates(self, wallet):
        other_public_key, _ = KeyPairGenerator.generate()
        with pytest.raises(ValidationError):
            wallet.with_key_pair(salt=b"x")
        with pytest.raises(ValidationError):
            wallet.with_key_pair(private_key=b"\x00" * 96)
        with pytest.raises(ValidationError):
            wallet.with_key_pair(public_key=other_public_key)
