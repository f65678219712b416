"""
Command-line entry point: python -m mclaunch
"""

import argparse
import logging
import sys
from typing import List, Optional

from mclaunch.launcher import launch_from_install
from mclaunch.mclaunch_config import LaunchConfig, default_install_directory
from mclaunch.mclaunch_exceptions import MclaunchException, SelectionError
from mclaunch.mclaunch_logger import MclaunchLogger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mclaunch", description="Launch a version of the client")
    parser.add_argument("--minecraft", dest="install_directory", default=None,
                        help=f"Path to minecraft directory (default: {default_install_directory()})")
    parser.add_argument("--debug", action="store_true", default=None, help="Show the command on launch")
    parser.add_argument("--profile", default=None, help="Selected profile to launch")
    parser.add_argument("--user", default=None, help="Selected user to launch with")
    parser.add_argument("--lastprofile", dest="last_profile", action="store_true", default=None,
                        help="Launch last used profile")
    parser.add_argument("--lastuser", dest="last_user", action="store_true", default=None,
                        help="Launch with last used user profile")
    parser.add_argument("--java", dest="java_executable", default=None, help="Java executable to run")
    parser.add_argument("--config", default=None, help="TOML file with a [launcher] table")
    return parser


def config_from_args(args: argparse.Namespace) -> LaunchConfig:
    overrides = {k: v for k, v in vars(args).items() if k != "config"}
    if args.config:
        return LaunchConfig.from_toml(args.config, **overrides)
    return LaunchConfig.from_dict(overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(message)s")

    logger = MclaunchLogger()
    try:
        config = config_from_args(args)
    except MclaunchException as e:
        sys.stderr.write(f"{e}\n")
        return 1
    if config.debug:
        logger.set_level(logging.DEBUG)

    result = launch_from_install(config, logger)
    if not result.succeeded:
        if isinstance(result.error, SelectionError):
            sys.stderr.write(f"{result.error.message}: -\n")
            for choice in result.error.choices:
                sys.stderr.write(f"\t{choice}\n")
        else:
            sys.stderr.write(f"{result.error}\n")
        return result.exit_code if result.exit_code is not None else 1
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
