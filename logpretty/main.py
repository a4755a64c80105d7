#!/usr/bin/env python3
"""logpretty — pretty-print JSON log lines from stdin."""

import argparse
import logging
import os
import sys
from typing import TextIO

from logpretty.config import Config, ConfigError, load_config, load_yaml_config, resolve_log_level
from logpretty.formatter import format_line
from logpretty.reader import read_lines
from logpretty.signals import SignalSetupError, suppress_signals

LOG_FORMAT = "%(asctime)s [LOGPRETTY] %(levelname)s %(message)s"

logger = logging.getLogger(__name__)


def build_cli_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="logpretty",
        description="Pretty-print JSON log lines read from stdin.",
    )
    parser.add_argument(
        "-b", "--blacklist",
        help="Comma-separated fields to hide, in addition to the built-in ones",
    )
    parser.add_argument(
        "-w", "--whitelist",
        help="Comma-separated fields to show; all others are hidden",
    )
    parser.add_argument(
        "--no-color", action="store_true",
        help="Disable ANSI colors (also honoured via NO_COLOR)",
    )
    parser.add_argument(
        "--config", default=os.environ.get("LOGPRETTY_CONFIG"),
        help="Path to YAML config file with field rules",
    )
    return parser


def run(stream_in: TextIO, stream_out: TextIO, config: Config) -> int:
    """Format every line of stream_in onto stream_out until end of input.

    Output is flushed after each line. Returns the number of lines read.
    Read errors propagate.
    """
    policy = config.policy
    count = 0
    for line in read_lines(stream_in):
        stream_out.write(format_line(line, policy, config.color))
        stream_out.flush()
        count += 1
    return count


def main(argv: list[str] | None = None) -> int:
    parser = build_cli_parser()
    args = parser.parse_args(argv)

    try:
        level = resolve_log_level()
    except ConfigError as e:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT, stream=sys.stderr)
        logger.error("%s", e)
        return 1
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    try:
        config = load_config(args, load_yaml_config(args.config))
    except ConfigError as e:
        logger.error("%s", e)
        return 1
    logger.debug("Config: first=%s, last=%s, blacklist=%s, whitelist=%s, color=%s",
                 config.first, config.last, config.blacklist, config.whitelist, config.color)

    try:
        suppress_signals()
    except SignalSetupError as e:
        logger.error("%s", e)
        return 1

    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8")
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")

    try:
        count = run(sys.stdin, sys.stdout, config)
    except BrokenPipeError:
        # Downstream closed (e.g. `| head`); silence the final flush.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        os.close(devnull)
        return 0
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read line: %s", e)
        return 1

    logger.info("End of input after %d line(s)", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
