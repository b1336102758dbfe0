"""Tests for address derivation."""

import pytest

from msgverify.bitcoin.addresses import compress_pubkey, derive_address, derive_addresses, p2wpkh_script
from msgverify.bitcoin.config import MAINNET, REGTEST, TESTNET
from msgverify.crypto.ecc import PublicKey
from msgverify.crypto.encoding import b58check_decode, bech32_decode
from msgverify.crypto.hashing import hash160
from msgverify.crypto.signatures import P2PKH, P2SH_P2WPKH, P2WPKH, UNKNOWN
from msgverify.errors import UnsupportedAddressClass

G_COMPRESSED = bytes.fromhex("0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")


@pytest.fixture
def g_key():
    return PublicKey.from_bytes(G_COMPRESSED)


class TestKnownAddresses:

    def test_p2pkh_compressed(self, g_key):
        assert derive_address(g_key, P2PKH, True, MAINNET) == "1BgGZ9tcN4rm9KBzDn7KprQz87SZ26SAMH"

    def test_p2pkh_uncompressed(self, g_key):
        assert derive_address(g_key, P2PKH, False, MAINNET) == "1EHNa6Q4Jz2uvNExL497mE43ikXhwF6kZm"

    def test_p2wpkh(self, g_key):
        assert derive_address(g_key, P2WPKH, True, MAINNET) == "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"

    def test_p2wpkh_testnet(self, g_key):
        assert derive_address(g_key, P2WPKH, True, TESTNET) == "tb1qw508d6qejxtdg4y5r3zarvary0c5xw7kxpjzsx"

    def test_p2sh_p2wpkh_commits_to_redeem_script(self, g_key):
        address = derive_address(g_key, P2SH_P2WPKH, True, MAINNET)
        version, payload = b58check_decode(address)
        assert version == b"\x05"
        assert payload == hash160(p2wpkh_script(hash160(G_COMPRESSED)))


class TestNetworkPrefixes:

    def test_mainnet(self, pubkey):
        assert derive_address(pubkey, P2PKH, True, MAINNET).startswith("1")
        assert derive_address(pubkey, P2SH_P2WPKH, True, MAINNET).startswith("3")
        assert derive_address(pubkey, P2WPKH, True, MAINNET).startswith("bc1q")

    def test_testnet(self, pubkey):
        assert derive_address(pubkey, P2PKH, True, TESTNET)[0] in "mn"
        assert derive_address(pubkey, P2SH_P2WPKH, True, TESTNET).startswith("2")
        assert derive_address(pubkey, P2WPKH, True, TESTNET).startswith("tb1q")

    def test_regtest_hrp(self, pubkey):
        address = derive_address(pubkey, P2WPKH, True, REGTEST)
        hrp, version, program = bech32_decode(address)
        assert hrp == "bcrt"
        assert version == 0
        assert program == hash160(pubkey)


class TestDeriveAddress:

    def test_segwit_ignores_uncompressed_flag(self, pubkey):
        assert derive_address(pubkey, P2WPKH, False) == derive_address(pubkey, P2WPKH, True)
        assert derive_address(pubkey, P2SH_P2WPKH, False) == derive_address(pubkey, P2SH_P2WPKH, True)

    def test_p2pkh_depends_on_form(self, pubkey):
        assert derive_address(pubkey, P2PKH, False) != derive_address(pubkey, P2PKH, True)

    def test_accepts_raw_bytes(self, pubkey, pubkey_uncompressed):
        assert derive_address(pubkey_uncompressed, P2PKH, True) == derive_address(pubkey, P2PKH, True)

    def test_unknown_class(self, pubkey):
        with pytest.raises(UnsupportedAddressClass):
            derive_address(pubkey, UNKNOWN, True)

    def test_derive_addresses(self, g_key):
        addresses = derive_addresses(g_key)
        assert addresses['legacy'] == "1BgGZ9tcN4rm9KBzDn7KprQz87SZ26SAMH"
        assert addresses['legacy_uncompressed'] == "1EHNa6Q4Jz2uvNExL497mE43ikXhwF6kZm"
        assert addresses['segwit'] == "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"
        assert addresses['nested_segwit'].startswith("3")
        assert addresses['pubkey_hash'] == "751e76e8199196d454941c45d1b3a323f1433bd6"


def test_compress_pubkey(pubkey, pubkey_uncompressed):
    assert compress_pubkey(pubkey_uncompressed) == pubkey
    with pytest.raises(ValueError):
        compress_pubkey(pubkey)
