from __future__ import annotations

import sys
from typing import Sequence

import yaml

from .constants import SERVICE_NAME, VERSION
from .logging import (
    DEFAULT_LOGLEVEL,
    DEFAULT_LOGTARGET,
    LOG_LEVELS,
    LogTarget,
    get_logger,
    start_logging,
    start_startup_logging,
)
from .options import FlagParsingError, FlagSet, ResolverConfig, add_flags

logger = get_logger(__name__)


def create_flagset(config: ResolverConfig) -> FlagSet:
    fs = FlagSet(
        "cluster-dns-config",
        description="Validates the command-line configuration of the cluster DNS resolver"
        " and prints the effective configuration in YAML format.",
    )
    fs.add_argument(
        "-V",
        "--version",
        help="Get version",
        action="version",
        version=VERSION,
    )
    fs.add_argument(
        "--loglevel",
        default=DEFAULT_LOGLEVEL,
        choices=LOG_LEVELS,
        help="Logging level.",
    )
    fs.add_argument(
        "--logtarget",
        default=DEFAULT_LOGTARGET.value,
        choices=[t.value for t in LogTarget],
        help="Logging target.",
    )
    add_flags(config, fs)
    return fs


def main(argv: Sequence[str] | None = None) -> None:
    # flags log while they are applied, keep it until the logging flags are known
    startup = start_startup_logging()

    config = ResolverConfig()
    fs = create_flagset(config)
    try:
        args = fs.parse(argv)
    except FlagParsingError as e:
        start_logging(SERVICE_NAME, startup=startup)
        print(e, file=sys.stderr)
        sys.exit(1)

    start_logging(SERVICE_NAME, args.loglevel, args.logtarget, startup)
    logger.notice(f"{SERVICE_NAME} version {VERSION}")

    if config.federations and config.uses_dynamic_config():
        logger.warning(
            "Federations are set together with the config-map or config-dir flag,"
            " the dynamic configuration source takes precedence"
        )

    yaml.safe_dump(config.to_dict(), sys.stdout, sort_keys=False)
