"""Command-line entry point for s3report."""

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config.models import (
    AWSCredentials,
    DEFAULT_GRAPHITE_ADDRESS,
    GraphiteAddress,
    ReportConfig,
)
from .config.settings import Settings
from .errors import ConfigurationError, ReportError
from .utils.logger import setup_logger
from .workflow import ReportWorkflow


DESCRIPTION = "s3report - Collects today's S3 metrics and reports them to Graphite"


def build_parser(default_prefix: str) -> argparse.ArgumentParser:
    """
    Build the command-line parser.

    Args:
        default_prefix: Prefix shown as default, derived from AWS_REGION
    """
    parser = argparse.ArgumentParser(
        prog='s3report',
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY and AWS_REGION must be set.

Examples:
  # Send today's metrics to the local carbon listener
  s3report

  # Yesterday's metrics, custom prefix and graphite server
  s3report -1 -p storage.s3. -g graphite.internal:2003

  # Print the lines without sending them
  s3report --dry-run
        """
    )

    parser.add_argument(
        '-p', '--prefix',
        default=default_prefix,
        metavar='PREFIX',
        help=f'prefix for graphite metrics names (default: {default_prefix})'
    )

    parser.add_argument(
        '-1', '--previous-day',
        dest='previous_day',
        action='store_true',
        help="collect yesterday's metrics rather than today's"
    )

    parser.add_argument(
        '-g', '--graphite',
        default=DEFAULT_GRAPHITE_ADDRESS,
        metavar='ADDRESS',
        help=f'graphite server to send metrics to (default: {DEFAULT_GRAPHITE_ADDRESS})'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Collect and print metrics without sending them'
    )

    parser.add_argument(
        '--log-level',
        default=Settings.get('LOG_LEVEL', 'INFO'),
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO or LOG_LEVEL env var)'
    )

    return parser


def load_config(args: argparse.Namespace, credentials: AWSCredentials) -> ReportConfig:
    """
    Build the run configuration from parsed arguments.

    Raises:
        ConfigurationError: If the graphite address or any value is invalid
    """
    if not args.prefix.isascii():
        raise ConfigurationError(
            f"Invalid prefix {args.prefix!r}: graphite metric names must be ASCII",
            details={"prefix": args.prefix}
        )

    graphite = GraphiteAddress.parse(args.graphite).resolve()
    try:
        return ReportConfig(
            credentials=credentials,
            prefix=args.prefix,
            previous_day=args.previous_day,
            graphite=graphite,
            dry_run=args.dry_run
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def run(argv: Optional[List[str]] = None) -> int:
    """
    Run one report and return the process exit code.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        int: 0 on success or empty result, 1 on any fatal error
    """
    logger = setup_logger("s3report", Settings.get('LOG_LEVEL', 'INFO'))

    try:
        credentials = AWSCredentials.from_env()
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    parser = build_parser(ReportConfig.default_prefix(credentials.region))
    args = parser.parse_args(argv)
    logger.setLevel(args.log_level)

    try:
        config = load_config(args, credentials)
        workflow = ReportWorkflow(config, logger)
        workflow.run()

    except ReportError as e:
        logger.error(
            str(e),
            extra={"error_type": type(e).__name__, **e.details}
        )
        return 1

    return 0


def main():
    """CLI entry point."""
    sys.exit(run())


if __name__ == '__main__':
    main()
