"""
Unit Tests for the Contract Deployer
"""

import pytest
from unittest.mock import Mock
from eth_account import Account

from blockchain.toolchain_config import ToolchainConfig
from blockchain.contract_deployer import ContractDeployer, DeploymentError
from conftest import TEST_PRIVATE_KEY


CONTRACT_ADDRESS = '0x5FbDB2315678afecb367f032d93F642f64180aa3'
TX_HASH = b'\x12' * 32


@pytest.fixture
def compiler():
    compiler = Mock()
    compiler.compile.return_value = {
        'MultiCrowdfunding': {'abi': [], 'bytecode': '0x6080604052'}
    }
    return compiler


@pytest.fixture
def w3():
    """Mock Web3 instance"""
    w3 = Mock()
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.contract.return_value.constructor.return_value.build_transaction.return_value = {
        'data': '0x6080604052', 'nonce': 7
    }
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = {
        'status': 1,
        'contractAddress': CONTRACT_ADDRESS,
        'gasUsed': 1234567,
        'blockNumber': 42
    }
    return w3


@pytest.fixture
def deployer(config, compiler, w3):
    deployer = ContractDeployer(config, 'sepolia', compiler=compiler, w3=w3, receipt_timeout=10)
    deployer.account = Mock(
        address=deployer.account.address,
        sign_transaction=Mock(return_value=Mock(raw_transaction=b'signed'))
    )
    return deployer


class TestContractDeployer:
    """Test deployment flow"""

    def test_account_from_first_credential(self, config, compiler, w3):
        deployer = ContractDeployer(config, 'sepolia', compiler=compiler, w3=w3)

        assert deployer.account.address == Account.from_key(TEST_PRIVATE_KEY).address

    def test_unknown_network(self, config, compiler, w3):
        with pytest.raises(ValueError):
            ContractDeployer(config, 'mainnet', compiler=compiler, w3=w3)

    @pytest.mark.asyncio
    async def test_deploy_contract(self, deployer, w3):
        result = await deployer.deploy_contract('MultiCrowdfunding')

        assert result.address == CONTRACT_ADDRESS
        assert result.tx_hash == '0x' + '12' * 32
        assert result.gas_used == 1234567
        assert result.block_number == 42
        assert result.network == 'sepolia'

        w3.eth.contract.assert_called_once_with(abi=[], bytecode='0x6080604052')
        w3.eth.send_raw_transaction.assert_called_once_with(b'signed')
        w3.eth.wait_for_transaction_receipt.assert_called_once_with(TX_HASH, 10)

    @pytest.mark.asyncio
    async def test_transaction_uses_account_nonce(self, deployer, w3):
        await deployer.deploy_contract('MultiCrowdfunding')

        build_transaction = w3.eth.contract.return_value.constructor.return_value.build_transaction
        assert build_transaction.call_args[0][0] == {
            'from': deployer.account.address,
            'nonce': 7
        }
        deployer.account.sign_transaction.assert_called_once_with({'data': '0x6080604052', 'nonce': 7})

    @pytest.mark.asyncio
    async def test_constructor_args(self, deployer, w3):
        await deployer.deploy_contract('MultiCrowdfunding', 100, 'name')

        w3.eth.contract.return_value.constructor.assert_called_once_with(100, 'name')

    @pytest.mark.asyncio
    async def test_reverted_deployment(self, deployer, w3):
        w3.eth.wait_for_transaction_receipt.return_value = {
            'status': 0, 'contractAddress': None, 'gasUsed': 21000, 'blockNumber': 42
        }

        with pytest.raises(DeploymentError, match="reverted"):
            await deployer.deploy_contract('MultiCrowdfunding')

    @pytest.mark.asyncio
    async def test_unknown_contract(self, deployer, w3):
        with pytest.raises(ValueError, match="Crowdsale"):
            await deployer.deploy_contract('Crowdsale')

        w3.eth.send_raw_transaction.assert_not_called()

    @pytest.mark.asyncio
    async def test_compile_failure_stops_deployment(self, deployer, compiler, w3):
        compiler.compile.side_effect = ValueError("Solidity compiler version is not configured")

        with pytest.raises(ValueError):
            await deployer.deploy_contract('MultiCrowdfunding')

        w3.eth.contract.assert_not_called()
        w3.eth.send_raw_transaction.assert_not_called()

    @pytest.mark.asyncio
    async def test_network_error_propagates(self, deployer, w3):
        w3.eth.send_raw_transaction.side_effect = ConnectionError("connection refused")

        with pytest.raises(ConnectionError):
            await deployer.deploy_contract('MultiCrowdfunding')

    def test_missing_rpc_url(self, env, compiler):
        """No fallback to a local node when the endpoint is unset"""
        env.delenv('INFURA_RPC')

        with pytest.raises(ValueError, match="RPC URL.*sepolia"):
            ContractDeployer(ToolchainConfig.load(), 'sepolia', compiler=compiler)

    def test_missing_signing_account(self, env, compiler, w3):
        env.delenv('SEPOLIA_PRIVATE_KEY')

        with pytest.raises(ValueError, match="signing account.*sepolia"):
            ContractDeployer(ToolchainConfig.load(), 'sepolia', compiler=compiler, w3=w3)
