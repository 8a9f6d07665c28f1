"""
Contract Verifier
Publishes deployed contract sources to Etherscan
"""

import json
import asyncio
from typing import Dict
import aiohttp
from loguru import logger

from .compiler import SolidityCompiler


class VerificationError(Exception):
    """Etherscan rejected the submission or failed to verify the source"""


class ContractVerifier:
    """
    Etherscan source verification (API v2, standard JSON input)
    """

    PENDING_PREFIX = 'pending'
    ALREADY_VERIFIED = 'already verified'

    def __init__(
        self,
        config,
        chain_id: int,
        compiler: SolidityCompiler = None,
        poll_interval: float = 5.0,
        max_polls: int = 30
    ):
        """
        Initialize Contract Verifier

        Args:
            config: ToolchainConfig instance
            chain_id: Chain the contract lives on
            compiler: Compiler wrapper holding artifacts and build info
            poll_interval: Seconds between status checks
            max_polls: Status checks before giving up
        """
        self.api_key = config.etherscan['api_key']
        self.api_url = config.etherscan['api_url']
        self.chain_id = chain_id
        self.compiler = compiler if compiler else SolidityCompiler(config)
        self.poll_interval = poll_interval
        self.max_polls = max_polls

    async def verify(self, address: str, contract_name: str, constructor_args: str = '') -> str:
        """
        Verify a deployed contract

        Args:
            address: Deployed contract address
            contract_name: Contract name
            constructor_args: ABI-encoded constructor arguments (hex, no 0x)

        Returns:
            Final status message from Etherscan
        """
        if not self.api_key:
            raise ValueError("Etherscan API key is not configured")

        artifact = self.compiler.get_artifact(contract_name)
        build_info = self.compiler.load_build_info()

        payload = {
            'apikey': self.api_key,
            'module': 'contract',
            'action': 'verifysourcecode',
            'contractaddress': address,
            'sourceCode': json.dumps(build_info['input']),
            'codeformat': 'solidity-standard-json-input',
            'contractname': f"{artifact['sourceName']}:{contract_name}",
            'compilerversion': f"v{build_info['solcLongVersion']}",
            'constructorArguements': constructor_args.removeprefix('0x')
        }

        logger.info(f"Submitting {contract_name} at {address} for verification...")

        async with aiohttp.ClientSession() as session:
            data = await self._post(session, payload)

            if data.get('status') != '1':
                message = str(data.get('result', ''))

                if self.ALREADY_VERIFIED in message.lower():
                    logger.info(f"{contract_name} is already verified")
                    return message

                raise VerificationError(f"Verification request rejected: {message}")

            guid = data['result']
            logger.info(f"Verification submitted, guid: {guid}")

            return await self._wait_for_result(session, guid)

    async def _wait_for_result(self, session: aiohttp.ClientSession, guid: str) -> str:
        """Poll verification status until it leaves the pending state"""
        params = {
            'apikey': self.api_key,
            'module': 'contract',
            'action': 'checkverifystatus',
            'guid': guid
        }

        for _ in range(self.max_polls):
            data = await self._get(session, params)
            message = str(data.get('result', ''))

            if message.lower().startswith(self.PENDING_PREFIX):
                logger.debug(f"Verification pending: {message}")
                await asyncio.sleep(self.poll_interval)
                continue

            if data.get('status') == '1' or self.ALREADY_VERIFIED in message.lower():
                logger.success(f"Verification complete: {message}")
                return message

            raise VerificationError(f"Verification failed: {message}")

        raise VerificationError(f"Verification still pending after {self.max_polls} checks (guid {guid})")

    async def _post(self, session: aiohttp.ClientSession, payload: Dict) -> Dict:
        async with session.post(
            self.api_url,
            params={'chainid': str(self.chain_id)},
            data=payload,
            timeout=aiohttp.ClientTimeout(total=30)
        ) as response:
            response.raise_for_status()
            return await response.json(content_type=None)

    async def _get(self, session: aiohttp.ClientSession, params: Dict) -> Dict:
        async with session.get(
            self.api_url,
            params={'chainid': str(self.chain_id), **params},
            timeout=aiohttp.ClientTimeout(total=30)
        ) as response:
            response.raise_for_status()
            return await response.json(content_type=None)
