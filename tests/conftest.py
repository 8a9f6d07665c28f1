"""
Shared fixtures
"""

import sys
import pytest
from loguru import logger

from blockchain.toolchain_config import ToolchainConfig


TEST_PRIVATE_KEY = '0x' + '11' * 32
TEST_RPC_URL = 'https://sepolia.infura.io/v3/test-project-id'


@pytest.fixture
def env(monkeypatch):
    """Environment variables named by config/toolchain_config.json"""
    monkeypatch.setenv('INFURA_RPC', TEST_RPC_URL)
    monkeypatch.setenv('SEPOLIA_PRIVATE_KEY', TEST_PRIVATE_KEY)
    monkeypatch.setenv('API_KEY', 'TESTAPIKEY')
    monkeypatch.delenv('DEPLOY_NETWORK', raising=False)
    return monkeypatch


@pytest.fixture
def config(env):
    """Configuration loaded from the project's JSON file"""
    return ToolchainConfig.load()


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks bound to captured streams after each test"""
    yield
    logger.remove()
    logger.add(sys.stderr)
