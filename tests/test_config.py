"""Tests for network parameters and Config loading."""

import json

import pytest

from msgverify.bitcoin.config import Config, MAINNET, NETWORKS, REGTEST, TESTNET, get_network


class TestNetworks:

    def test_mainnet_values(self):
        assert MAINNET.p2pkh_prefix == 0x00
        assert MAINNET.p2sh_prefix == 0x05
        assert MAINNET.bech32_hrp == "bc"
        assert MAINNET.p2pkh_version() == b"\x00"

    def test_testnet_values(self):
        assert TESTNET.p2pkh_version() == b"\x6f"
        assert TESTNET.p2sh_version() == b"\xc4"
        assert REGTEST.bech32_hrp == "bcrt"

    def test_immutable(self):
        with pytest.raises(AttributeError):
            MAINNET.bech32_hrp = "tb"

    def test_lookup(self):
        assert get_network(" TestNet ") is TESTNET
        assert set(NETWORKS) == {"mainnet", "testnet", "signet", "regtest"}

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_network("litecoin")

    def test_non_string_name(self):
        with pytest.raises(ValueError):
            get_network(None)


class TestConfig:

    def test_defaults(self):
        assert Config.NETWORK == "mainnet"
        assert Config.network_params() is MAINNET

    def test_load_saved_settings(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"network": "regtest", "default_timeout": 2.5, "log_level": "debug"}))
        assert Config.load_saved_settings(path) is True
        assert Config.network_params() is REGTEST
        assert Config.DEFAULT_TIMEOUT == 2.5
        assert Config.LOG_LEVEL == "DEBUG"

    def test_default_path(self, tmp_path):
        Config.CONFIG_DIR = tmp_path
        (tmp_path / "config.json").write_text(json.dumps({"network": "testnet"}))
        assert Config.load_saved_settings() is True
        assert Config.NETWORK == "testnet"

    def test_missing_file(self, tmp_path):
        assert Config.load_saved_settings(tmp_path / "absent.json") is False
        assert Config.NETWORK == "mainnet"

    def test_malformed_file_keeps_defaults(self, tmp_path, caplog):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert Config.load_saved_settings(path) is False
        assert Config.NETWORK == "mainnet"
        assert "Ignoring unreadable config" in caplog.text

    def test_non_object_keeps_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        assert Config.load_saved_settings(path) is False

    def test_non_string_network_in_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"network": 5}))
        with pytest.raises(ValueError, match="must be a string"):
            Config.load_saved_settings(path)
        assert Config.NETWORK == "mainnet"

    def test_unknown_network_in_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"network": "dogecoin"}))
        with pytest.raises(ValueError):
            Config.load_saved_settings(path)
        assert Config.NETWORK == "mainnet"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("MSGVERIFY_NETWORK", "signet")
        monkeypatch.setenv("MSGVERIFY_TIMEOUT", "0.75")
        Config.load_environment()
        assert Config.NETWORK == "signet"
        assert Config.DEFAULT_TIMEOUT == 0.75
