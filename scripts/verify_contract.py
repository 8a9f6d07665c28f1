"""
Verify Script
Publishes a deployed contract's source to Etherscan

Usage: python -m scripts.verify_contract <address> [--contract NAME] [--network NAME]
"""

import os
import sys
import asyncio
import argparse
from web3 import Web3
from loguru import logger

from blockchain.toolchain_config import ToolchainConfig
from blockchain.contract_verifier import ContractVerifier
from utils.logging_setup import setup_logging
from scripts.deploy import CONTRACT_NAME


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Verify a deployed contract on Etherscan")
    parser.add_argument('address', help="Deployed contract address")
    parser.add_argument('--contract', default=CONTRACT_NAME, help="Contract name")
    parser.add_argument('--network', default=os.getenv('DEPLOY_NETWORK'), help="Network name")
    parser.add_argument('--constructor-args', default='', help="ABI-encoded constructor arguments (hex)")
    return parser.parse_args(argv)


async def main(args) -> str:
    config = ToolchainConfig.load()
    network_name = args.network or config.default_network
    network = config.get_network(network_name)

    if not network['url']:
        raise ValueError(f"No RPC URL configured for network '{network_name}'")

    w3 = Web3(Web3.HTTPProvider(network['url']))
    verifier = ContractVerifier(config, chain_id=w3.eth.chain_id)

    return await verifier.verify(
        Web3.to_checksum_address(args.address),
        args.contract,
        args.constructor_args
    )


if __name__ == "__main__":
    setup_logging(log_file=os.getenv('LOG_FILE'))

    try:
        asyncio.run(main(parse_args()))
    except Exception as e:
        logger.exception(f"Verification failed: {e}")
        sys.exit(1)

    sys.exit(0)
