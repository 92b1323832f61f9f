"""
main.py

Command line entry point for the temp file registry.

Configuration is read from TFR_* environment variables; command line
flags override them. The Flask development server runs threaded, one
thread per request, with the reaper sweeping in the background.
"""

import argparse
import logging
from typing import Optional, Sequence

from temp_file_registry.app_factory import create_app
from temp_file_registry.config.logging_config import configure_logging
from temp_file_registry.config.settings import RegistryConfig
from temp_file_registry.domain.errors import ConfigurationError

COMMAND_DESCRIPTION = (
    "temp-file-registry is temporary file registry provided through an HTTP web API."
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser; every flag defaults to the environment value."""
    parser = argparse.ArgumentParser(prog="temp-file-registry", description=COMMAND_DESCRIPTION)
    parser.add_argument("-p", "--port", type=int, help="Port (default: 8888)")
    parser.add_argument("--host", help="Listen address (default: 0.0.0.0)")
    parser.add_argument(
        "-e",
        "--expiration-minutes",
        dest="default_expiration_minutes",
        type=int,
        help="Default file expiration (minutes) (default: 10)",
    )
    parser.add_argument(
        "-m",
        "--max-file-size-mb",
        dest="max_file_size_mb",
        type=int,
        help="Max file size (MB) (default: 1024)",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        dest="log_level",
        type=int,
        choices=(0, 1, 2),
        help="Log level (0:Panic, 1:Info, 2:Debug) (default: 2)",
    )
    return parser


def load_config(argv: Optional[Sequence[str]] = None) -> RegistryConfig:
    """
    Resolve configuration from the environment and command line.

    Args:
        argv: Command line arguments, defaults to sys.argv[1:]

    Returns:
        Validated RegistryConfig
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return RegistryConfig.from_env().with_overrides(**vars(args))
    except ConfigurationError as e:
        parser.error(str(e))


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Parse configuration, configure logging and serve the API."""
    config = load_config(argv)
    configure_logging(config.log_level)

    app = create_app(config)
    logger.info(f"Start application: listening on {config.host}:{config.port}")
    try:
        app.run(host=config.host, port=config.port, threaded=True)
    finally:
        app.reaper.stop(wait=False)


if __name__ == "__main__":
    main()
