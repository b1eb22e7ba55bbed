# File: src/sealwallet/config/wallet_config.py

import copy
import os
from typing import Any, Dict

import yaml

from ..utils.config import Config

DEFAULT_CONFIG: Dict[str, Any] = {
    "store": {
        "root": Config.DEFAULT_STORE_ROOT,
    },
    "logging": {
        "log_dir": "logs",
        "log_level": "INFO",
    },
}

class WalletConfig:
    def __init__(self, config_path: str = "config/wallet.yaml", create_if_missing: bool = False):
        self.config_path = config_path
        self.create_if_missing = create_if_missing
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            return self._create_default_config()

        with open(self.config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file '{self.config_path}' must contain a mapping")
        return self._merge(copy.deepcopy(DEFAULT_CONFIG), loaded)

    def _create_default_config(self) -> Dict[str, Any]:
        config = copy.deepcopy(DEFAULT_CONFIG)
        if self.create_if_missing:
            self._write(config)
        return config

    @classmethod
    def _merge(cls, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                cls._merge(base[key], value)
            else:
                base[key] = value
        return base

    def _write(self, config: Dict[str, Any]):
        directory = os.path.dirname(self.config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.config_path, 'w') as f:
            yaml.safe_dump(config, f, default_flow_style=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value."""
        try:
            keys = key.split('.')
            value = self.config
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def update(self, key: str, value: Any):
        """Update configuration value."""
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value

        self._write(self.config)

    @property
    def store_root(self) -> str:
        return os.path.expanduser(str(self.get("store.root", Config.DEFAULT_STORE_ROOT)))

    @property
    def log_dir(self) -> str:
        return os.path.expanduser(str(self.get("logging.log_dir", "logs")))

    @property
    def log_level(self) -> str:
        return str(self.get("logging.log_level", "INFO"))
