"""
Deploy Script
Deploys the MultiCrowdfunding contract and prints its address
"""

import os
import sys
import asyncio
from loguru import logger

from blockchain.toolchain_config import ToolchainConfig
from blockchain.contract_deployer import ContractDeployer
from utils.logging_setup import setup_logging

CONTRACT_NAME = 'MultiCrowdfunding'


async def main(deployer: ContractDeployer = None):
    """Deploy the contract on the network selected by DEPLOY_NETWORK"""
    if deployer is None:
        config = ToolchainConfig.load()
        network_name = os.getenv('DEPLOY_NETWORK') or config.default_network
        deployer = ContractDeployer(config, network_name)

    contract = await deployer.deploy_contract(CONTRACT_NAME)
    print(f"Contract address: {contract.address}")

    return contract


def run(deployer: ContractDeployer = None):
    """Run main() and exit with 0 on success, 1 on any failure"""
    setup_logging(log_file=os.getenv('LOG_FILE'))

    try:
        asyncio.run(main(deployer))
    except Exception as e:
        logger.exception(f"Deployment failed: {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    run()
