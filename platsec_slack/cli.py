"""
Slack Notification CLI

Sends a notification to one or more Slack channels through the relay,
using credentials held in SSM Parameter Store.

Usage:
    platsec-slack -c alerts -c security --header "Scan finished" \\
        --title "Compliance" --text "3 findings" --color red
"""

import logging
import sys

import click
from dotenv import load_dotenv

from .monitoring import capture_exception, init_sentry
from .notifier import send_message_with_env_vars
from .types import ErrorKind

logger = logging.getLogger(__name__)

EXIT_CODES = {
    ErrorKind.CONFIGURATION: 2,
    ErrorKind.CREDENTIAL_RESOLUTION: 3,
    ErrorKind.PAYLOAD: 4,
    ErrorKind.DELIVERY: 5,
}


def setup_logging(verbose: bool, quiet: bool = False):
    """Configure logging to output to stdout."""
    if quiet:
        level = logging.WARNING
    else:
        level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


@click.command()
@click.option('-c', '--channel', 'channels', multiple=True, help='Target Slack channel (repeatable)')
@click.option('--header', default='', help='Top-level message text')
@click.option('--title', default='', help='Attachment title')
@click.option('--text', default='', help='Attachment body')
@click.option('--color', default='good', show_default=True, help='Attachment color')
@click.option('--per-channel', is_flag=True, help='Send a separate message to each channel')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output (show DEBUG logs)')
@click.option('-q', '--quiet', is_flag=True, help='Quiet mode (only show warnings/errors)')
def cli(channels, header, title, text, color, per_channel, verbose, quiet):
    """Send a Slack notification via the platform relay."""
    load_dotenv()
    setup_logging(verbose, quiet)
    init_sentry()

    result = send_message_with_env_vars(
        list(channels), header, title, text, color, per_channel=per_channel
    )

    if result.is_success:
        click.echo(f"Sent {result.sent} message(s)")
        return

    capture_exception(result.error, tags={"error_kind": result.error_kind.value})
    click.echo(f"Error: {result.error}", err=True)
    sys.exit(EXIT_CODES[result.error_kind])


if __name__ == '__main__':
    cli()
