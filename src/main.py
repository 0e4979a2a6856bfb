#!/usr/bin/env python3
"""
Main entry point for the catlink driver.
Loads the rig configuration, runs the CAT service and prints status updates.
"""

import argparse
import queue
import sys
from typing import List, Optional, Tuple

from .config import CONFIG_FILE, ConfigService
from .errors import CatError, ConfigError
from .logging_cfg import configure_logging, get_logger
from .schema import ConfigValidator
from .service import CatService
from .ui import UserInterface
from .version import BUILD_DATE, VERSION, get_version_string

STATUS_WAIT_SECONDS = 1.0


def parse_command_arg(value: str) -> Tuple[str, List[str]]:
    """Split "NAME:P1,P2" into ("NAME", ["P1", "P2"]).

    "NAME" and "NAME:" both mean no parameters.
    """
    name, _, raw_params = value.partition(':')
    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError(f"invalid command '{value}'")
    params = raw_params.split(',') if raw_params else []
    return name, params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"catlink CAT driver v{VERSION}",
                                     formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument("--version", action="version", version=get_version_string())
    parser.add_argument("--config", type=str, default=None,
                        help=f"configuration file (default: $CATLINK_CONFIG or {CONFIG_FILE})")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="increase verbosity")
    parser.add_argument("--logfile", type=str, help="Custom log file path (default: ~/.cache/catlink/logs/catlink.log)")
    parser.add_argument("--syslog", action="store_true", default=False, help="Enable syslog handler for systemd integration")
    parser.add_argument("--no-header", action="store_true", default=False, help="Skip initial rig information display")
    parser.add_argument("-c", "--command", dest="commands", action="append", default=[],
                        type=parse_command_arg, metavar="NAME[:P1,P2]",
                        help="command to send after start (repeatable)")
    parser.add_argument("--once", action="store_true", default=False,
                        help="exit after the first status update")
    return parser


def run(service: CatService, ui: UserInterface, commands, once: bool = False):
    """Start the service, send startup commands and print status until interrupted."""
    log = service.logger
    service.start()
    try:
        for name, params in commands:
            try:
                service.enqueue_command(name, *params)
            except CatError as e:
                log.error(f"Command rejected: {e}", command=name)

        stream = service.status_channel()
        while True:
            try:
                status = stream.get(timeout=STATUS_WAIT_SECONDS)
            except queue.Empty:
                continue
            ui.show_status(status)
            if once:
                break
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down")
    finally:
        service.stop()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(verbose=args.verbose, log_file=args.logfile, enable_syslog=args.syslog)
    log = get_logger()

    try:
        config_service = ConfigService(args.config).load()
    except ConfigError as e:
        log.error(str(e))
        return 2

    service = CatService(config_service=config_service, logger=log, validator=ConfigValidator())
    ui = UserInterface()
    try:
        service.initialize()
        if not args.no_header:
            ui.show_header(VERSION, BUILD_DATE, service.rig_config())
        run(service, ui, args.commands, once=args.once)
    except CatError as e:
        log.error(f"CAT service failed: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
