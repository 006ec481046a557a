#!/usr/bin/env python3

"""Main volumebot module, containing the main CLI entry point."""

import signal
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from volumebot.config import load_config
from volumebot.errors import ConfigError, ListContainersError
from volumebot.logger import LOG_LEVELS, configure_logging, logger
from volumebot.volumebot import VolumeBot

VERSION = "1.0"

EXIT_SUCCESS = 0
EXIT_BACKUP_FAILED = 1
EXIT_LIST_FAILED = 2
EXIT_CONFIG_ERROR = 3


def parse_args(argv: Optional[List[str]] = None) -> Tuple[Optional[Path], Dict[str, Any]]:
    """Parses CLI parameters.

    Options which are not given on the command line are returned as None so that the config file and the defaults
    apply.

    Returns:
        Tuple[Optional[Path], Dict[str, Any]]: Config file path, explicitly set configuration values.
    """
    parser = ArgumentParser(description="Backup all mounted volumes connected to a running container.")

    parser.add_argument(
        "-s",
        "--stop-start",
        action="store_true",
        default=None,
        help="Stop the container before backup and restart it afterwards.",
    )
    parser.add_argument("-i", "--image", help="The image to use for running a volume backup (default: ubuntu).")
    parser.add_argument("-l", "--loglevel", choices=list(LOG_LEVELS), help="Logging level (default: info).")
    parser.add_argument("-d", "--docker", help="Where to find the docker executable (default: /usr/bin/docker).")
    parser.add_argument("-o", "--destination", help="Directory for the tar files (default: current directory).")
    parser.add_argument("-c", "--config", help="Path to a YAML configuration file.")
    parser.add_argument("--log-file", help="Additionally write the log to this file.")

    args = parser.parse_args(argv)

    overrides: Dict[str, Any] = {
        "stop_start": args.stop_start,
        "image": args.image,
        "loglevel": args.loglevel,
        "docker": args.docker,
        "destination": Path(args.destination) if args.destination else None,
        "log_file": Path(args.log_file) if args.log_file else None,
    }

    return Path(args.config) if args.config else None, overrides


def main(argv: Optional[List[str]] = None) -> int:
    """Runs a backup and returns the process exit code."""
    config_file, overrides = parse_args(argv)

    try:
        config = load_config(config_file, overrides)
    except ConfigError as error:
        logger.error(f"Exited with an error: {error}")
        return EXIT_CONFIG_ERROR

    configure_logging(config.loglevel, config.log_file)
    logger.info(f"Docker volume backup v{VERSION}")

    bot = VolumeBot(config)

    def handle_shutdown(signum, frame):
        logger.warning(f"Received signal {signum}, finishing the current container before exiting.")
        bot.request_stop()
        # a second signal interrupts immediately
        signal.signal(signum, previous_handlers[signum] or signal.SIG_DFL)

    previous_handlers = {
        signum: signal.signal(signum, handle_shutdown) for signum in (signal.SIGTERM, signal.SIGINT)
    }

    try:
        report = bot.run()
    except ListContainersError as error:
        logger.error(f"Exited with an error: {error}")
        return EXIT_LIST_FAILED
    finally:
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)

    if not report.success:
        logger.error(f"Exited with an error: backup failed for {report.failed}.")
        return EXIT_BACKUP_FAILED

    logger.info("Exited with success.")
    return EXIT_SUCCESS


def main_backup() -> None:
    """Main backup CLI entry point."""
    sys.exit(main())
