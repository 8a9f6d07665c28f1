"""
Compile Script
Compiles all contract sources with the configured solc version
"""

import os
import sys
from loguru import logger

from blockchain.toolchain_config import ToolchainConfig
from blockchain.compiler import SolidityCompiler
from utils.logging_setup import setup_logging


def compile_contracts(config: ToolchainConfig = None) -> dict:
    """Compile and return artifacts keyed by contract name"""
    compiler = SolidityCompiler(config if config else ToolchainConfig.load())
    return compiler.compile()


if __name__ == "__main__":
    setup_logging(log_file=os.getenv('LOG_FILE'))

    try:
        artifacts = compile_contracts()
    except Exception as e:
        logger.exception(f"Compilation failed: {e}")
        sys.exit(1)

    for name, artifact in artifacts.items():
        logger.info(f"  {artifact['sourceName']}:{name}")

    sys.exit(0)
