"""
Toolchain Configuration
Compiler version, network endpoints, signing credentials and verification key
"""

import os
import json
from typing import Dict, List, Optional
from loguru import logger
from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    'config',
    'toolchain_config.json'
)


class ToolchainConfig:
    """
    Static toolchain settings

    Secrets are never stored in the JSON file; it only names the
    environment variables holding them. Unset variables resolve to None.
    """

    def __init__(self, raw_config: Dict):
        """
        Initialize configuration from its raw JSON mapping

        Args:
            raw_config: Parsed contents of toolchain_config.json
        """
        self.raw_config = raw_config

        self.solidity: Optional[str] = raw_config.get('solidity')
        self.default_network: Optional[str] = raw_config.get('default_network')
        self.paths: Dict = raw_config.get('paths', {})

        self.networks = self._resolve_networks(raw_config.get('networks', {}))
        self.etherscan = self._resolve_etherscan(raw_config.get('etherscan', {}))

        logger.debug(
            f"Toolchain config loaded - solc {self.solidity}, "
            f"networks: {', '.join(self.networks) or 'none'}"
        )

    @classmethod
    def load(cls, path: str = DEFAULT_CONFIG_PATH) -> 'ToolchainConfig':
        """
        Load configuration from a JSON file

        Args:
            path: Path to the configuration file

        Returns:
            ToolchainConfig instance
        """
        with open(path, 'r') as f:
            raw_config = json.load(f)

        return cls(raw_config)

    def _resolve_networks(self, networks_config: Dict) -> Dict:
        """Resolve RPC URL and accounts of every network from the environment"""
        networks = {}

        for network_name, network_config in networks_config.items():
            accounts: List[Optional[str]] = [
                os.getenv(var_name)
                for var_name in network_config.get('accounts_env', [])
            ]

            networks[network_name] = {
                'url': os.getenv(network_config.get('url_env', '')),
                'accounts': accounts
            }

        return networks

    def _resolve_etherscan(self, etherscan_config: Dict) -> Dict:
        """Resolve verification service settings"""
        return {
            'api_key': os.getenv(etherscan_config.get('api_key_env', '')),
            'api_url': etherscan_config.get('api_url')
        }

    def get_network(self, name: str) -> Dict:
        """
        Get connection parameters for a network

        Args:
            name: Network name

        Returns:
            Dict with 'url' and 'accounts'
        """
        if name not in self.networks:
            raise ValueError(
                f"Unknown network '{name}' - configured networks: "
                f"{', '.join(self.networks) or 'none'}"
            )

        return self.networks[name]

    @property
    def sources_dir(self) -> str:
        return self.paths.get('sources', 'contracts')

    @property
    def artifacts_dir(self) -> str:
        return self.paths.get('artifacts', 'artifacts')
