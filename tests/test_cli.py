# tests/test_cli.py
import pytest
import base64
import logging
import os
import shutil
import tempfile
import yaml
from sealwallet.cli.cli import CLI
from sealwallet.crypto.keys import KeyPairGenerator
from sealwallet.wallet.store import WalletStore

class TestCLI:
    @pytest.fixture
    def temp_dir(self):
        tmp_dir = tempfile.mkdtemp()
        yield tmp_dir
        package_logger = logging.getLogger("sealwallet")
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        shutil.rmtree(tmp_dir)

    @pytest.fixture
    def config_path(self, temp_dir):
        path = os.path.join(temp_dir, "wallet.yaml")
        with open(path, "w") as f:
            yaml.safe_dump({
                "store": {"root": os.path.join(temp_dir, "store")},
                "logging": {"log_dir": os.path.join(temp_dir, "logs"), "log_level": "ERROR"},
            }, f)
        return path

    def run(self, config_path, *args):
        return CLI().main(["--config", config_path, *args])

    def test_generate_and_list(self, config_path, temp_dir, capsys):
        assert self.run(config_path, "generate", "alice", "--password", "pw1") == 0
        out = capsys.readouterr().out
        assert "Address: A" in out

        assert os.path.exists(os.path.join(temp_dir, "store", "wallet_alice.json"))

        assert self.run(config_path, "list") == 0
        assert capsys.readouterr().out.startswith("alice\tA")

    def test_store_override(self, config_path, temp_dir):
        other = os.path.join(temp_dir, "other")
        assert self.run(config_path, "--store", other, "generate", "bob", "--password", "pw") == 0
        assert WalletStore(other).exists("bob") == True

    def test_show(self, config_path, capsys):
        self.run(config_path, "generate", "alice", "--password", "pw1")
        capsys.readouterr()

        assert self.run(config_path, "show", "alice") == 0
        out = capsys.readouterr().out
        assert "Nickname: alice" in out
        assert "Public key: " in out

    def test_sign(self, config_path, temp_dir, capsys):
        self.run(config_path, "generate", "alice", "--password", "pw1")
        capsys.readouterr()

        assert self.run(config_path, "sign", "alice", "hello", "--password", "pw1") == 0
        signature = base64.b64decode(capsys.readouterr().out.strip())

        wallet = WalletStore(os.path.join(temp_dir, "store")).load("alice")
        assert KeyPairGenerator.verify(wallet.key_pair.public_key, b"hello", signature) == True

    def test_sign_wrong_password(self, config_path, capsys):
        self.run(config_path, "generate", "alice", "--password", "pw1")
        assert self.run(config_path, "sign", "alice", "hello", "--password", "nope") == 1
        assert "Error:" in capsys.readouterr().err

    def test_prompted_password(self, config_path, mocker):
        mocker.patch("sealwallet.cli.cli.getpass.getpass", return_value="secret")
        assert self.run(config_path, "generate", "alice") == 0
        assert self.run(config_path, "sign", "alice", "hi") == 0

    def test_passwd(self, config_path):
        self.run(config_path, "generate", "alice", "--password", "pw1")
        assert self.run(config_path, "passwd", "alice", "--password", "pw1", "--new-password", "pw2") == 0
        assert self.run(config_path, "sign", "alice", "hi", "--password", "pw2") == 0
        assert self.run(config_path, "sign", "alice", "hi", "--password", "pw1") == 1

    def test_delete(self, config_path, capsys):
        self.run(config_path, "generate", "alice", "--password", "pw1")
        assert self.run(config_path, "delete", "alice") == 0
        assert self.run(config_path, "delete", "alice") == 1
        assert "no such wallet" in capsys.readouterr().err

    def test_no_command(self, config_path, capsys):
        assert self.run(config_path) == 2
