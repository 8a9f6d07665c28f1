"""
Solidity Compiler
Compiles contract sources with the configured solc version and writes artifacts
"""

import os
import glob
import json
from typing import Dict
import solcx
from loguru import logger


class SolidityCompiler:
    """
    Thin wrapper around py-solc-x

    Artifacts are written as <artifacts>/<sourceName>/<ContractName>.json,
    build info (standard JSON input + solc long version) as
    <artifacts>/build-info/build-info.json.
    """

    OUTPUT_SELECTION = [
        'abi',
        'evm.bytecode.object',
        'evm.deployedBytecode.object',
        'metadata'
    ]

    def __init__(self, config):
        """
        Initialize Solidity Compiler

        Args:
            config: ToolchainConfig instance
        """
        self.config = config
        self.solc_version = config.solidity
        self.sources_dir = os.path.abspath(config.sources_dir)
        self.artifacts_dir = os.path.abspath(config.artifacts_dir)

        # Source names are relative to the project root, e.g. contracts/Foo.sol
        self.base_path = os.path.dirname(self.sources_dir)

    def compile(self) -> Dict[str, Dict]:
        """
        Compile all sources

        Returns:
            Mapping of contract name to artifact
        """
        if not self.solc_version:
            raise ValueError("Solidity compiler version is not configured")

        sources = self._collect_sources()

        if not sources:
            raise FileNotFoundError(f"No Solidity sources found in {self.sources_dir}")

        self._ensure_solc_installed()

        standard_input = self._build_standard_input(sources)

        logger.info(f"Compiling {len(sources)} file(s) with solc {self.solc_version}...")

        output = solcx.compile_standard(
            standard_input,
            base_path=self.base_path,
            allow_paths=[self.base_path],
            solc_version=self.solc_version
        )

        for warning in output.get('errors', []):
            logger.warning(warning.get('formattedMessage', warning.get('message', '')).strip())

        artifacts = self._write_artifacts(output)
        self._write_build_info(standard_input)

        logger.success(f"Compiled {len(artifacts)} contract(s)")
        return artifacts

    def _ensure_solc_installed(self):
        """Install the configured solc version if it is missing"""
        installed = [str(version) for version in solcx.get_installed_solc_versions()]

        if self.solc_version not in installed:
            logger.info(f"Installing solc {self.solc_version}...")
            solcx.install_solc(self.solc_version)

        solcx.set_solc_version(self.solc_version, silent=True)

    def _collect_sources(self) -> Dict[str, str]:
        """Read every .sol file under the sources directory"""
        pattern = os.path.join(self.sources_dir, '**', '*.sol')
        sources = {}

        for path in sorted(glob.glob(pattern, recursive=True)):
            source_name = os.path.relpath(path, self.base_path).replace(os.sep, '/')

            with open(path, 'r') as f:
                sources[source_name] = f.read()

        return sources

    def _build_standard_input(self, sources: Dict[str, str]) -> Dict:
        """Build solc standard JSON input"""
        return {
            'language': 'Solidity',
            'sources': {
                source_name: {'content': content}
                for source_name, content in sources.items()
            },
            'settings': {
                'optimizer': {'enabled': False, 'runs': 200},
                'outputSelection': {
                    '*': {'*': self.OUTPUT_SELECTION}
                }
            }
        }

    def _write_artifacts(self, output: Dict) -> Dict[str, Dict]:
        """Write one artifact per compiled contract"""
        artifacts = {}

        self._check_unique_names(output)

        for source_name, contracts in output.get('contracts', {}).items():
            for contract_name, contract_output in contracts.items():
                artifact = {
                    'contractName': contract_name,
                    'sourceName': source_name,
                    'abi': contract_output['abi'],
                    'bytecode': '0x' + contract_output['evm']['bytecode']['object'],
                    'deployedBytecode': '0x' + contract_output['evm']['deployedBytecode']['object']
                }

                artifact_dir = os.path.join(self.artifacts_dir, source_name)
                os.makedirs(artifact_dir, exist_ok=True)

                with open(os.path.join(artifact_dir, f"{contract_name}.json"), 'w') as f:
                    json.dump(artifact, f, indent=2)

                artifacts[contract_name] = artifact

        return artifacts

    def _check_unique_names(self, output: Dict):
        """Reject contract names defined in more than one source"""
        sources_by_name = {}

        for source_name, contracts in output.get('contracts', {}).items():
            for contract_name in contracts:
                sources_by_name.setdefault(contract_name, []).append(source_name)

        for contract_name, source_names in sources_by_name.items():
            if len(source_names) > 1:
                candidates = ', '.join(f"{source}:{contract_name}" for source in source_names)
                raise ValueError(f"Multiple contracts named {contract_name}: {candidates}")

    def _write_build_info(self, standard_input: Dict):
        """Store compiler input for source verification"""
        build_info_dir = os.path.join(self.artifacts_dir, 'build-info')
        os.makedirs(build_info_dir, exist_ok=True)

        solc_long_version = solcx.get_solc_version(with_commit_hash=True)

        with open(os.path.join(build_info_dir, 'build-info.json'), 'w') as f:
            json.dump({
                'solcVersion': self.solc_version,
                'solcLongVersion': str(solc_long_version),
                'input': standard_input
            }, f, indent=2)

    def get_artifact(self, contract_name: str) -> Dict:
        """
        Load a previously written artifact

        Args:
            contract_name: Contract name

        Returns:
            Artifact dict
        """
        pattern = os.path.join(self.artifacts_dir, '**', f"{contract_name}.json")
        matches = [
            path for path in glob.glob(pattern, recursive=True)
            if os.sep + 'build-info' + os.sep not in path
        ]

        if not matches:
            raise FileNotFoundError(f"Artifact for contract {contract_name} not found in {self.artifacts_dir}")

        if len(matches) > 1:
            source_names = [
                os.path.relpath(os.path.dirname(path), self.artifacts_dir).replace(os.sep, '/')
                for path in sorted(matches)
            ]
            candidates = ', '.join(f"{source}:{contract_name}" for source in source_names)
            raise ValueError(f"Multiple artifacts named {contract_name}: {candidates}")

        with open(matches[0], 'r') as f:
            return json.load(f)

    def load_build_info(self) -> Dict:
        """Load build info written by the last compilation"""
        path = os.path.join(self.artifacts_dir, 'build-info', 'build-info.json')

        if not os.path.exists(path):
            raise FileNotFoundError(f"Build info not found: {path} - compile first")

        with open(path, 'r') as f:
            return json.load(f)
