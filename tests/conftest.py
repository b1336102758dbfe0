"""Shared fixtures for msgverify tests."""

import pytest

from msgverify.bitcoin.config import Config

from tests.signing import PRIVKEY, public_key_for


@pytest.fixture
def pubkey():
    return public_key_for(PRIVKEY)


@pytest.fixture
def pubkey_uncompressed():
    return public_key_for(PRIVKEY, compressed=False)


@pytest.fixture(autouse=True)
def restore_config():
    """Keep Config class attributes from leaking between tests"""
    saved = {k: getattr(Config, k) for k in ('CONFIG_DIR', 'NETWORK', 'DEFAULT_TIMEOUT', 'LOG_LEVEL')}
    yield
    for key, value in saved.items():
        setattr(Config, key, value)
