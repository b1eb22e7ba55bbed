# File: src/sealwallet/wallet/store.py
import os
import tempfile
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from pydantic import ValidationError

from ..exceptions import (
    InvalidNicknameError,
    ParseError,
    SerializationError,
    StorageError,
    WalletError,
    WalletNotFoundError,
)
from ..utils.config import Config
from ..utils.logger import get_logger
from .models import Wallet

logger = get_logger(__name__)


@dataclass
class LoadFailure:
    """A wallet file that could not be loaded"""
    filename: str
    error: WalletError


@dataclass
class LoadOutcome:
    """Result of loading one wallet file during enumeration"""
    filename: str
    wallet: Optional[Wallet] = None
    error: Optional[WalletError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LoadAllResult:
    """Every wallet that loaded, plus the files that did not"""
    wallets: List[Wallet] = field(default_factory=list)
    failures: List[LoadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class WalletStore:
    """
    One JSON file per wallet, named `wallet_<nickname>.json`, under `root`.

    Writes replace the whole record atomically and are serialised per
    nickname within the process.
    """

    def __init__(self, root: str = Config.DEFAULT_STORE_ROOT):
        self.root = os.path.abspath(root)
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @staticmethod
    def filename(nickname: str) -> str:
        """Wallet file name for a nickname"""
        return f"{Config.WALLET_FILE_PREFIX}{nickname}{Config.WALLET_FILE_SUFFIX}"

    @staticmethod
    def is_wallet_filename(name: str) -> bool:
        return (
            name.startswith(Config.WALLET_FILE_PREFIX)
            and name.endswith(Config.WALLET_FILE_SUFFIX)
            and len(name) > len(Config.WALLET_FILE_PREFIX) + len(Config.WALLET_FILE_SUFFIX)
        )

    @staticmethod
    def nickname_from_filename(name: str) -> str:
        return name[len(Config.WALLET_FILE_PREFIX):-len(Config.WALLET_FILE_SUFFIX)]

    @staticmethod
    def validate_nickname(nickname: str) -> str:
        """Reject nicknames that cannot be used as a single file name"""
        if not isinstance(nickname, str) or not nickname:
            raise InvalidNicknameError("nickname must be a non-empty string")
        if nickname in (".", ".."):
            raise InvalidNicknameError(f"nickname '{nickname}' is reserved")
        forbidden = {"/", "\\", "\x00", os.sep}
        if os.altsep:
            forbidden.add(os.altsep)
        if any(ch in nickname for ch in forbidden):
            raise InvalidNicknameError(f"nickname '{nickname}' contains a path separator or NUL")
        return nickname

    def path_for(self, nickname: str) -> str:
        self.validate_nickname(nickname)
        return os.path.join(self.root, self.filename(nickname))

    @contextmanager
    def lock(self, nickname: str) -> Iterator[None]:
        """Hold the in-process lock of a nickname"""
        # Entries live as long as the store so every caller shares one lock per nickname
        with self._locks_guard:
            nickname_lock = self._locks.setdefault(nickname, threading.RLock())
        with nickname_lock:
            yield

    def exists(self, nickname: str) -> bool:
        return os.path.isfile(self.path_for(nickname))

    def save(self, wallet: Wallet) -> str:
        """Write the full wallet record, replacing any previous one"""
        path = self.path_for(wallet.nickname)

        try:
            content = wallet.to_json()
        except (ValueError, TypeError) as e:
            raise SerializationError(f"marshalling wallet '{wallet.nickname}': {e}") from e

        with self.lock(wallet.nickname):
            try:
                os.makedirs(self.root, exist_ok=True)
                self._write_atomic(path, content)
            except OSError as e:
                raise StorageError(f"writing wallet to '{path}': {e}", wallet=wallet) from e

        logger.info(f"Saved wallet '{wallet.nickname}' to {path}")
        return path

    def _write_atomic(self, path: str, content: str):
        fd, tmp_path = tempfile.mkstemp(
            dir=self.root,
            prefix=".tmp_",
            suffix=Config.WALLET_FILE_SUFFIX
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                os.fchmod(f.fileno(), Config.WALLET_FILE_MODE)
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def load(self, nickname: str) -> Wallet:
        """Read the wallet stored under a nickname"""
        return self._load_file(self.path_for(nickname), nickname=nickname)

    def _load_file(self, path: str, nickname: Optional[str] = None) -> Wallet:
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            raise WalletNotFoundError(f"reading file '{path}': no such wallet") from None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"reading file '{path}': {e}") from e

        try:
            wallet = Wallet.from_json(content)
        except ValidationError as e:
            raise ParseError(f"unmarshalling file '{path}': {e}") from e

        if nickname is not None and wallet.nickname != nickname:
            raise ParseError(
                f"file '{path}' holds wallet '{wallet.nickname}', expected '{nickname}'"
            )
        return wallet

    def iter_wallets(self) -> Iterator[LoadOutcome]:
        """Lazily load every wallet file, yielding one outcome per file"""
        for name in self._wallet_filenames():
            path = os.path.join(self.root, name)
            try:
                wallet = self._load_file(path, nickname=self.nickname_from_filename(name))
                yield LoadOutcome(filename=name, wallet=wallet)
            except WalletError as e:
                logger.warning(f"Skipping wallet file '{name}': {e}")
                yield LoadOutcome(filename=name, error=e)

    def load_all(self) -> LoadAllResult:
        """Load every wallet in the store, collecting failures per file"""
        result = LoadAllResult()
        for outcome in self.iter_wallets():
            if outcome.ok:
                result.wallets.append(outcome.wallet)
            else:
                result.failures.append(LoadFailure(filename=outcome.filename, error=outcome.error))
        return result

    def nicknames(self) -> List[str]:
        return [self.nickname_from_filename(name) for name in self._wallet_filenames()]

    def _wallet_filenames(self) -> List[str]:
        try:
            entries = os.listdir(self.root)
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"reading store directory '{self.root}': {e}") from e

        return sorted(
            name for name in entries
            if self.is_wallet_filename(name) and os.path.isfile(os.path.join(self.root, name))
        )

    def delete(self, nickname: str):
        """Remove the wallet file of a nickname"""
        path = self.path_for(nickname)
        with self.lock(nickname):
            try:
                os.remove(path)
            except FileNotFoundError:
                raise WalletNotFoundError(f"deleting wallet '{path}': no such wallet") from None
            except OSError as e:
                raise StorageError(f"deleting wallet '{path}': {e}") from e

        logger.info(f"Deleted wallet '{nickname}'")
