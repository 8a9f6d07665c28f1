"""
Contract Deployment Runner
Runs scripts/deploy.py against the selected network

Usage: python deploy.py [--network NAME]
"""

import os
import sys
import argparse
import subprocess


def build_command():
    return [sys.executable, "-m", "scripts.deploy"]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Deploy the crowdfunding contract")
    parser.add_argument('--network', help="Network from config/toolchain_config.json")
    args = parser.parse_args(argv)

    env = os.environ.copy()
    if args.network:
        env['DEPLOY_NETWORK'] = args.network

    result = subprocess.run(
        build_command(),
        cwd=os.path.dirname(os.path.abspath(__file__)),
        env=env
    )

    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
