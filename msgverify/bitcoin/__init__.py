"""
msgverify.bitcoin - network parameters and address derivation.

Re-exports the public API from submodules.
"""

from msgverify.bitcoin.config import (
    Config,
    NetworkParams,
    MAINNET,
    TESTNET,
    SIGNET,
    REGTEST,
    NETWORKS,
    get_network,
)
from msgverify.bitcoin.addresses import (
    compress_pubkey,
    p2wpkh_script,
    derive_address,
    derive_addresses,
)

__all__ = [
    # config
    "Config",
    "NetworkParams",
    "MAINNET",
    "TESTNET",
    "SIGNET",
    "REGTEST",
    "NETWORKS",
    "get_network",
    # addresses
    "compress_pubkey",
    "p2wpkh_script",
    "derive_address",
    "derive_addresses",
]
