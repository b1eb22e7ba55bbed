# File: src/sealwallet/wallet/models.py
import base64
import binascii
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)

from ..crypto.address import AddressCodec
from ..utils.config import Config


def _decode_base64(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"invalid base64: {e}") from e
    return value


def _encode_base64(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


# Raw bytes in Python, standard padded base64 in JSON
Base64Bytes = Annotated[
    bytes,
    BeforeValidator(_decode_base64),
    PlainSerializer(_encode_base64, return_type=str, when_used="json"),
]


class KeyPair(BaseModel):
    """Key material of a wallet.

    `private_key` holds either the 64-byte plaintext key or its sealed form
    (ciphertext followed by the 16-byte GCM tag). Which one is held is up to
    the caller to track.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    private_key: Base64Bytes = Field(alias="PrivateKey")
    public_key: Base64Bytes = Field(alias="PublicKey")
    salt: Base64Bytes = Field(alias="Salt")
    nonce: Base64Bytes = Field(alias="Nonce")

    @field_validator("public_key")
    @classmethod
    def check_public_key(cls, value: bytes) -> bytes:
        if len(value) != Config.PUBLIC_KEY_SIZE:
            raise ValueError(f"public key must be {Config.PUBLIC_KEY_SIZE} bytes")
        return value

    @field_validator("salt")
    @classmethod
    def check_salt(cls, value: bytes) -> bytes:
        if len(value) != Config.SALT_SIZE:
            raise ValueError(f"salt must be {Config.SALT_SIZE} bytes")
        return value

    @field_validator("nonce")
    @classmethod
    def check_nonce(cls, value: bytes) -> bytes:
        if len(value) != Config.NONCE_SIZE:
            raise ValueError(f"nonce must be {Config.NONCE_SIZE} bytes")
        return value

    @field_validator("private_key")
    @classmethod
    def check_private_key(cls, value: bytes) -> bytes:
        if len(value) not in (Config.PRIVATE_KEY_SIZE, Config.SEALED_PRIVATE_KEY_SIZE):
            raise ValueError(
                f"private key must be {Config.PRIVATE_KEY_SIZE} (plain) or "
                f"{Config.SEALED_PRIVATE_KEY_SIZE} (sealed) bytes"
            )
        return value


class Wallet(BaseModel):
    """A nickname bound to an address and its key pair"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    version: int = Field(default=Config.WALLET_VERSION, alias="Version", ge=0, le=255)
    nickname: str = Field(alias="Nickname")
    address: str = Field(alias="Address")
    key_pair: KeyPair = Field(alias="KeyPair")

    @model_validator(mode="after")
    def check_address(self) -> "Wallet":
        if self.address != AddressCodec.derive_address(self.key_pair.public_key):
            raise ValueError("address does not match public key")
        return self

    @classmethod
    def create(
        cls,
        nickname: str,
        private_key: bytes,
        public_key: bytes,
        salt: bytes,
        nonce: bytes
    ) -> "Wallet":
        """Assemble a wallet, deriving its address from the public key"""
        return cls(
            version=Config.WALLET_VERSION,
            nickname=nickname,
            address=AddressCodec.derive_address(public_key),
            key_pair=KeyPair(
                private_key=private_key,
                public_key=public_key,
                salt=salt,
                nonce=nonce,
            ),
        )

    def with_key_pair(self, **changes: bytes) -> "Wallet":
        """Copy of this wallet with some key pair fields replaced, revalidated"""
        key_pair = KeyPair.model_validate({**self.key_pair.model_dump(), **changes})
        return Wallet.model_validate({
            "version": self.version,
            "nickname": self.nickname,
            "address": self.address,
            "key_pair": key_pair,
        })

    def info(self) -> "WalletInfo":
        return WalletInfo(
            nickname=self.nickname,
            address=self.address,
            public_key=_encode_base64(self.key_pair.public_key),
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, content: str) -> "Wallet":
        return cls.model_validate_json(content)


class WalletInfo(BaseModel):
    """Public view of a wallet, safe to display"""
    nickname: str
    address: str
    public_key: str

