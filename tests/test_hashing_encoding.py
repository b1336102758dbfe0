"""Tests for hashing and Base58/Bech32/base64 encodings."""

import pytest

from msgverify.crypto.hashing import sha256, sha256d, ripemd160, hash160
from msgverify.crypto.encoding import (
    b64decode_strict,
    b58encode,
    b58decode,
    b58check_encode,
    b58check_decode,
    bech32_decode,
    segwit_encode,
    convertbits,
)

G_COMPRESSED = bytes.fromhex("0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")
G_HASH160 = bytes.fromhex("751e76e8199196d454941c45d1b3a323f1433bd6")


class TestHashing:

    def test_sha256_empty(self):
        assert sha256(b"").hex() == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_sha256d_empty(self):
        assert sha256d(b"").hex() == "5df6e0e2761359d30a8275058e299fcc0381534545f55cf43e41983f5d4c9456"

    def test_ripemd160_empty(self):
        assert ripemd160(b"").hex() == "9c1185a5c5e9fc54612808977ee8f548b2258d31"

    def test_hash160_generator_point(self):
        assert hash160(G_COMPRESSED) == G_HASH160


class TestBase58:

    def test_leading_zeros_become_ones(self):
        assert b58encode(b"\x00\x00\x01") == "112"
        assert b58decode("112") == b"\x00\x00\x01"

    def test_empty(self):
        assert b58encode(b"") == "1"

    def test_check_encode_p2pkh(self):
        assert b58check_encode(b"\x00", G_HASH160) == "1BgGZ9tcN4rm9KBzDn7KprQz87SZ26SAMH"

    def test_check_decode(self):
        version, payload = b58check_decode("1BgGZ9tcN4rm9KBzDn7KprQz87SZ26SAMH")
        assert version == b"\x00"
        assert payload == G_HASH160

    def test_check_decode_bad_checksum(self):
        with pytest.raises(ValueError):
            b58check_decode("1BgGZ9tcN4rm9KBzDn7KprQz87SZ26SAMJ")

    def test_invalid_character(self):
        with pytest.raises(ValueError):
            b58decode("10OIl")


class TestBech32:

    def test_mainnet_p2wpkh(self):
        assert segwit_encode("bc", 0, G_HASH160) == "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"

    def test_testnet_p2wpkh(self):
        assert segwit_encode("tb", 0, G_HASH160) == "tb1qw508d6qejxtdg4y5r3zarvary0c5xw7kxpjzsx"

    def test_decode(self):
        hrp, version, program = bech32_decode("BC1QW508D6QEJXTDG4Y5R3ZARVARY0C5XW7KV8F3T4")
        assert hrp == "bc"
        assert version == 0
        assert program == G_HASH160

    def test_decode_bad_checksum(self):
        with pytest.raises(ValueError):
            bech32_decode("bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t5")

    def test_decode_mixed_case(self):
        with pytest.raises(ValueError):
            bech32_decode("bc1qW508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4")

    def test_convertbits_roundtrip(self):
        five = convertbits(list(G_HASH160), 8, 5)
        assert bytes(convertbits(five, 5, 8, pad=False)) == G_HASH160


class TestBase64:

    def test_standard_alphabet(self):
        assert b64decode_strict("AQID") == b"\x01\x02\x03"

    @pytest.mark.parametrize("text", [
        "AQI",          # missing padding
        "AQ-_",         # url-safe alphabet
        "AQID\n",       # stray whitespace
        "café",
    ])
    def test_rejects(self, text):
        with pytest.raises(ValueError):
            b64decode_strict(text)
