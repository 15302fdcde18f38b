# aaarg/cli/base_cmd.py

"""
Base setup for CLI commands: configuration loading and logging initialization.
"""

import logging
import sys

import click

from aaarg.config import load_configuration, AaargConfig
from aaarg.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


class ConfigGroup(click.Group):
    """
    A Click Group that loads configuration and sets up logging before
    invoking its subcommands. The config is passed on as ctx.obj['config'].
    """
    def invoke(self, ctx: click.Context):
        if ctx.obj is None:
            ctx.obj = {}

        try:
            if 'config' not in ctx.obj:
                ctx.obj['config'] = load_configuration()
            config: AaargConfig = ctx.obj['config']

            verbosity = -1 if ctx.params.get('quiet') else ctx.params.get('verbose', 0)
            setup_logging(config, verbosity)
            logger.debug("Logging setup complete in ConfigGroup.")
        except Exception as e:
            logging.getLogger("aaarg.error").critical(f"Critical error during CLI setup: {e!r}", exc_info=True)
            print(f"CRITICAL SETUP ERROR: {e!r}", file=sys.stderr)
            ctx.exit(1)

        # Errors raised by commands propagate to Click
        return super().invoke(ctx)


verbose_option = click.option(
    '-v', '--verbose',
    count=True,
    help="Increase verbosity level (-v for INFO, -vv for DEBUG)."
)
quiet_option = click.option(
    '-q', '--quiet',
    is_flag=True,
    default=False,
    help="Suppress all console output except critical errors."
)
