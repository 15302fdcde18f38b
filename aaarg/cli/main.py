# aaarg/cli/main.py

"""
Main entry point for the aaarg CLI application.
"""

import click

from aaarg.version import __version__
from .base_cmd import ConfigGroup, verbose_option, quiet_option
from .effects_cmd import alias_cmd, stutter_cmd, chain_cmd

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.group(context_settings=CONTEXT_SETTINGS, cls=ConfigGroup)
@click.version_option(__version__, '-V', '--version', package_name='aaarg', prog_name='aaarg')
@verbose_option
@quiet_option
@click.pass_context
def main_cli(ctx, verbose: int, quiet: bool):
    """
    aaarg: mangle audio with aliasing and stutter effects.

    Configuration is loaded from:
    Defaults -> ./aaarg.toml -> ~/.config/aaarg/aaarg.toml -> Env Vars (AAARG_*)

    Protect your hearing: output may be unexpectedly loud.
    """
    pass


main_cli.add_command(alias_cmd)
main_cli.add_command(stutter_cmd)
main_cli.add_command(chain_cmd)

cli = main_cli

if __name__ == "__main__":
    cli()
