"""
Blockchain Interaction Package
Handles toolchain configuration, compilation, deployment and verification
"""

from .toolchain_config import ToolchainConfig
from .compiler import SolidityCompiler
from .contract_deployer import ContractDeployer, DeploymentResult, DeploymentError
from .contract_verifier import ContractVerifier, VerificationError

__all__ = [
    'ToolchainConfig',
    'SolidityCompiler',
    'ContractDeployer',
    'DeploymentResult',
    'DeploymentError',
    'ContractVerifier',
    'VerificationError'
]
