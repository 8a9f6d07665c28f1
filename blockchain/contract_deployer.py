"""
Contract Deployer
Compiles, signs and broadcasts contract creation transactions
"""

import asyncio
from typing import Dict, Optional
from web3 import Web3
from eth_account import Account
from loguru import logger

from .compiler import SolidityCompiler


class DeploymentError(Exception):
    """Creation transaction was mined but reverted"""


class DeploymentResult:
    """Outcome of a single contract deployment"""

    def __init__(
        self,
        contract_name: str,
        address: str,
        tx_hash: str,
        gas_used: int,
        block_number: int,
        network: str
    ):
        self.contract_name = contract_name
        self.address = address
        self.tx_hash = tx_hash
        self.gas_used = gas_used
        self.block_number = block_number
        self.network = network

    def to_dict(self) -> Dict:
        return {
            'contract_name': self.contract_name,
            'address': self.address,
            'tx_hash': self.tx_hash,
            'gas_used': self.gas_used,
            'block_number': self.block_number,
            'network': self.network
        }

    def __repr__(self):
        return f"DeploymentResult({self.contract_name} at {self.address} on {self.network})"


class ContractDeployer:
    """
    Deploys compiled contracts to a configured network

    Signs with the first account configured for the network.
    """

    def __init__(
        self,
        config,
        network_name: str,
        compiler: Optional[SolidityCompiler] = None,
        w3: Optional[Web3] = None,
        receipt_timeout: int = 300
    ):
        """
        Initialize Contract Deployer

        Args:
            config: ToolchainConfig instance
            network_name: Network to deploy to
            compiler: Compiler wrapper (created from config if None)
            w3: Web3 instance (HTTP provider on the network URL if None)
            receipt_timeout: Seconds to wait for the deployment receipt
        """
        self.config = config
        self.network_name = network_name
        self.network = config.get_network(network_name)

        if not self.network['url']:
            raise ValueError(f"No RPC URL configured for network '{network_name}'")

        accounts = self.network['accounts']
        if not accounts or not accounts[0]:
            raise ValueError(f"No signing account configured for network '{network_name}'")

        self.compiler = compiler if compiler else SolidityCompiler(config)
        self.w3 = w3 if w3 else Web3(Web3.HTTPProvider(self.network['url']))
        self.receipt_timeout = receipt_timeout

        self.account = Account.from_key(accounts[0])

        logger.info(f"Contract Deployer initialized - network: {network_name}")
        logger.info(f"Deploying from: {self.account.address}")

    async def deploy_contract(self, contract_name: str, *constructor_args) -> DeploymentResult:
        """
        Deploy a contract and wait for confirmation

        Args:
            contract_name: Name of the contract to deploy
            *constructor_args: Constructor arguments

        Returns:
            DeploymentResult
        """
        artifacts = self.compiler.compile()

        if contract_name not in artifacts:
            raise ValueError(
                f"Contract {contract_name} not found in compiled artifacts "
                f"({', '.join(sorted(artifacts)) or 'none'})"
            )

        artifact = artifacts[contract_name]

        Contract = self.w3.eth.contract(abi=artifact['abi'], bytecode=artifact['bytecode'])

        logger.info(f"Building deployment transaction for {contract_name}...")

        transaction = Contract.constructor(*constructor_args).build_transaction({
            'from': self.account.address,
            'nonce': self.w3.eth.get_transaction_count(self.account.address)
        })

        signed_tx = self.account.sign_transaction(transaction)
        tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)

        logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
        logger.info("Waiting for confirmation...")

        receipt = await asyncio.get_running_loop().run_in_executor(
            None,
            self.w3.eth.wait_for_transaction_receipt,
            tx_hash,
            self.receipt_timeout
        )

        if receipt['status'] != 1:
            raise DeploymentError(
                f"Deployment of {contract_name} reverted (tx {Web3.to_hex(tx_hash)})"
            )

        result = DeploymentResult(
            contract_name=contract_name,
            address=receipt['contractAddress'],
            tx_hash=Web3.to_hex(tx_hash),
            gas_used=receipt['gasUsed'],
            block_number=receipt['blockNumber'],
            network=self.network_name
        )

        logger.success(f"{contract_name} deployed at {result.address}")
        logger.info(f"Gas used: {result.gas_used}")

        return result
