"""
Network parameters and runtime configuration for msgverify.
"""

import json
import logging
import os
from pathlib import Path
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)


class NetworkParams(NamedTuple):
    """Address-encoding parameters of one Bitcoin network"""
    name: str
    p2pkh_prefix: int
    p2sh_prefix: int
    bech32_hrp: str

    def p2pkh_version(self) -> bytes:
        return bytes([self.p2pkh_prefix])

    def p2sh_version(self) -> bytes:
        return bytes([self.p2sh_prefix])


MAINNET = NetworkParams("mainnet", 0x00, 0x05, "bc")
TESTNET = NetworkParams("testnet", 0x6f, 0xc4, "tb")
SIGNET = NetworkParams("signet", 0x6f, 0xc4, "tb")
REGTEST = NetworkParams("regtest", 0x6f, 0xc4, "bcrt")

NETWORKS = {n.name: n for n in (MAINNET, TESTNET, SIGNET, REGTEST)}


def get_network(name: str) -> NetworkParams:
    """Look up built-in network parameters by name"""
    if not isinstance(name, str):
        raise ValueError(f"Network name must be a string, got {type(name).__name__}")
    try:
        return NETWORKS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown network: {name} (expected one of {', '.join(NETWORKS)})") from None


class Config:
    """Verifier configuration"""

    # Settings directory
    CONFIG_DIR = Path.home() / ".msgverify"

    # Network: "mainnet", "testnet", "signet" or "regtest"
    NETWORK = "mainnet"

    # Seconds to wait for a verdict when the caller asks for bounded latency
    DEFAULT_TIMEOUT = 5.0

    # Logging verbosity for the CLI: ERROR, WARNING, INFO, DEBUG or TRACE
    LOG_LEVEL = "WARNING"

    @classmethod
    def config_path(cls) -> Path:
        return cls.CONFIG_DIR / "config.json"

    @classmethod
    def network_params(cls) -> NetworkParams:
        return get_network(cls.NETWORK)

    @classmethod
    def load_saved_settings(cls, path: Optional[Path] = None) -> bool:
        """Load settings from config.json if it exists. Returns True if a file was applied."""
        config_path = Path(path) if path else cls.config_path()
        if not config_path.exists():
            return False
        try:
            settings = json.loads(config_path.read_text())
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config %s: %s", config_path, e)
            return False
        if not isinstance(settings, dict):
            logger.warning("Ignoring config %s: expected a JSON object", config_path)
            return False

        if 'network' in settings:
            get_network(settings['network'])
            cls.NETWORK = settings['network'].strip().lower()
        if 'default_timeout' in settings:
            cls.DEFAULT_TIMEOUT = float(settings['default_timeout'])
        if 'log_level' in settings:
            cls.LOG_LEVEL = str(settings['log_level']).upper()
        logger.debug("Loaded settings from %s", config_path)
        return True

    @classmethod
    def load_environment(cls):
        """Apply MSGVERIFY_* environment overrides"""
        network = os.environ.get('MSGVERIFY_NETWORK')
        if network:
            get_network(network)
            cls.NETWORK = network.strip().lower()
        timeout = os.environ.get('MSGVERIFY_TIMEOUT')
        if timeout:
            cls.DEFAULT_TIMEOUT = float(timeout)
