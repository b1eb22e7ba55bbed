# tests/test_config.py
import pytest
import logging
import os
import shutil
import tempfile
import yaml
from sealwallet.config.wallet_config import WalletConfig
from sealwallet.monitoring.logging_config import LogConfig
from sealwallet.utils.logger import get_logger

class TestWalletConfig:
    @pytest.fixture
    def temp_dir(self):
        tmp_dir = tempfile.mkdtemp()
        yield tmp_dir
        shutil.rmtree(tmp_dir)

    def test_defaults_when_missing(self, temp_dir):
        path = os.path.join(temp_dir, "config", "wallet.yaml")
        config = WalletConfig(path)

        assert config.get("store.root") == "."
        assert config.log_level == "INFO"
        assert not os.path.exists(path)

    def test_create_if_missing(self, temp_dir):
        path = os.path.join(temp_dir, "config", "wallet.yaml")
        WalletConfig(path, create_if_missing=True)

        with open(path) as f:
            assert yaml.safe_load(f)["store"]["root"] == "."

    def test_partial_file_keeps_defaults(self, temp_dir):
        path = os.path.join(temp_dir, "wallet.yaml")
        with open(path, "w") as f:
            yaml.safe_dump({"store": {"root": "/var/wallets"}}, f)

        config = WalletConfig(path)
        assert config.store_root == "/var/wallets"
        assert config.log_dir == "logs"

    def test_update_persists(self, temp_dir):
        path = os.path.join(temp_dir, "wallet.yaml")
        config = WalletConfig(path)
        config.update("logging.log_level", "DEBUG")

        assert WalletConfig(path).log_level == "DEBUG"

    def test_get_missing_key(self, temp_dir):
        config = WalletConfig(os.path.join(temp_dir, "wallet.yaml"))
        assert config.get("store.nothing", "fallback") == "fallback"
        assert config.get("store.root.deeper") is None

    def test_rejects_non_mapping(self, temp_dir):
        path = os.path.join(temp_dir, "wallet.yaml")
        with open(path, "w") as f:
            f.write("- just\n- a list\n")
        with pytest.raises(ValueError):
            WalletConfig(path)


class TestLogging:
    @pytest.fixture
    def temp_dir(self):
        tmp_dir = tempfile.mkdtemp()
        yield tmp_dir
        package_logger = logging.getLogger("sealwallet")
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        shutil.rmtree(tmp_dir)

    def test_get_logger_attaches_package_handler(self):
        logger = get_logger("sealwallet.tests")
        assert logger.name == "sealwallet.tests"
        assert logging.getLogger("sealwallet").handlers

    def test_log_config_writes_file(self, temp_dir):
        package_logger = LogConfig(log_dir=temp_dir).setup_logging()
        get_logger("sealwallet.tests").info("wallet test entry")
        for handler in package_logger.handlers:
            handler.flush()

        files = os.listdir(temp_dir)
        assert len(files) == 1
        with open(os.path.join(temp_dir, files[0])) as f:
            assert "wallet test entry" in f.read()
