# aaarg/cli/effects_cmd.py

"""
CLI commands that run signal blocks over audio files.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from aaarg.config.models import AaargConfig
from aaarg.core.audio.io import load_source, save_buffer
from aaarg.core.blocks import AliasBlock, StutterBlock
from aaarg.core.errors import AaargError

logger = logging.getLogger(__name__)

# --- Common Options ---
input_argument = click.argument("input_file", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
output_option = click.option("-o", "--output", type=click.Path(dir_okay=False, resolve_path=True), default=None,
                             help="Output file path. Defaults to <paths.output_dir>/<input>_<effect>.wav.")
seed_option = click.option("--seed", type=int, default=None, help="Random seed for reproducible output.")
preserve_option = click.option("--preserve-metadata", is_flag=True, default=False,
                               help="Keep the input's channels and sample rate instead of stamping 2 ch / 44100 Hz "
                                    "(also enabled by defaults.preserve_metadata).")


# --- Option Groups ---

def alias_options(f):
    f = click.option("--duration", "target_duration", type=float, default=None,
                     help="Maximum output duration in seconds.")(f)
    f = click.option("--variation", "factor_variation", type=int, default=None,
                     help="Maximum random deviation of each sampling step.")(f)
    f = click.option("--factor", type=int, default=None, help="Speed-up factor (>= 1).")(f)
    return f


def stutter_options(f):
    f = click.option("--piece-length", "stutter_piece_length", type=float, nargs=2, default=None,
                     help="Range (LOW HIGH) of repeated piece lengths in seconds.")(f)
    f = click.option("--stutter-duration", "stutter_duration", type=float, nargs=2, default=None,
                     help="Range (LOW HIGH) of stutter durations in seconds.")(f)
    f = click.option("--count", "stutter_count", type=int, nargs=2, default=None,
                     help="Range (LOW HIGH) of how many stutters to place.")(f)
    return f


# --- Helpers ---

def _config(ctx: click.Context) -> AaargConfig:
    if isinstance(ctx.obj, dict) and 'config' in ctx.obj:
        return ctx.obj['config']
    return AaargConfig()


def _pick(value, fallback):
    return fallback if value is None else value


def _build_alias(config: AaargConfig, factor: Optional[int], factor_variation: Optional[int],
                 target_duration: Optional[float], seed: Optional[int], preserve: bool) -> AliasBlock:
    defaults = config.parameters.alias
    return AliasBlock(
        factor=_pick(factor, defaults.factor),
        factor_variation=_pick(factor_variation, defaults.factor_variation),
        target_duration=_pick(target_duration, defaults.target_duration),
        rng=seed,
        preserve_metadata=preserve,
    )


def _build_stutter(config: AaargConfig, stutter_count: Optional[Tuple[int, int]],
                   stutter_duration: Optional[Tuple[float, float]],
                   stutter_piece_length: Optional[Tuple[float, float]],
                   seed: Optional[int], preserve: bool) -> StutterBlock:
    defaults = config.parameters.stutter
    return StutterBlock(
        stutter_count=tuple(_pick(stutter_count, defaults.stutter_count)),
        stutter_duration=tuple(_pick(stutter_duration, defaults.stutter_duration)),
        stutter_piece_length=tuple(_pick(stutter_piece_length, defaults.stutter_piece_length)),
        rng=seed,
        preserve_metadata=preserve,
    )


def _output_path(config: AaargConfig, input_path: Path, output: Optional[str], slug: str) -> Path:
    """Explicit output path, or <paths.output_dir>/<input stem>_<slug>.wav."""
    if output is not None:
        return Path(output)
    return config.paths.output_dir / f"{input_path.stem}_{slug}.wav"


def _run(ctx: click.Context, input_file: str, output: Optional[str], blocks, description: str, slug: str):
    """Decodes the input, runs the blocks in order and writes the result."""
    config = _config(ctx)
    input_path = Path(input_file)
    output_path = _output_path(config, input_path, output, slug)
    logger.info(f"Running '{description}' on: {input_path}")

    try:
        source = load_source(input_path)
        buffer = None
        # Each block after the first reads the previous block's output
        for block in blocks:
            buffer = block.process(source if buffer is None else buffer.as_source())
        save_buffer(buffer, output_path, subtype=config.defaults.output_subtype)
    except (AaargError, ValueError) as e:
        raise click.UsageError(f"Error during {description}: {e}")

    click.echo(f"Successfully applied {description} to '{input_path.name}', saved to '{output_path.name}' "
               f"({len(buffer)} samples).")


# --- Commands ---

@click.command("alias")
@input_argument
@output_option
@alias_options
@seed_option
@preserve_option
@click.pass_context
def alias_cmd(ctx, input_file: str, output: Optional[str], factor: Optional[int], factor_variation: Optional[int],
              target_duration: Optional[float], seed: Optional[int], preserve_metadata: bool):
    """Speed the audio up by sparse, optionally jittered sampling."""
    config = _config(ctx)
    # The flag can only switch preservation on; the config default covers the rest
    preserve = preserve_metadata or config.defaults.preserve_metadata
    try:
        block = _build_alias(config, factor, factor_variation, target_duration, seed, preserve)
    except AaargError as e:
        raise click.UsageError(str(e))
    _run(ctx, input_file, output, [block], "alias", "alias")


@click.command("stutter")
@input_argument
@output_option
@stutter_options
@seed_option
@preserve_option
@click.pass_context
def stutter_cmd(ctx, input_file: str, output: Optional[str], stutter_count, stutter_duration, stutter_piece_length,
                seed: Optional[int], preserve_metadata: bool):
    """Repeat short windows of the audio in place."""
    config = _config(ctx)
    preserve = preserve_metadata or config.defaults.preserve_metadata
    try:
        block = _build_stutter(config, stutter_count, stutter_duration, stutter_piece_length, seed, preserve)
    except AaargError as e:
        raise click.UsageError(str(e))
    _run(ctx, input_file, output, [block], "stutter", "stutter")


@click.command("chain")
@input_argument
@output_option
@alias_options
@stutter_options
@seed_option
@preserve_option
@click.pass_context
def chain_cmd(ctx, input_file: str, output: Optional[str], factor, factor_variation, target_duration,
              stutter_count, stutter_duration, stutter_piece_length,
              seed: Optional[int], preserve_metadata: bool):
    """Alias the audio, then stutter the aliased result."""
    config = _config(ctx)
    preserve = preserve_metadata or config.defaults.preserve_metadata
    try:
        alias = _build_alias(config, factor, factor_variation, target_duration, seed, preserve)
        # Offset the seed so both stages do not share a random stream
        stutter = _build_stutter(config, stutter_count, stutter_duration, stutter_piece_length,
                                 None if seed is None else seed + 1, preserve)
    except AaargError as e:
        raise click.UsageError(str(e))
    _run(ctx, input_file, output, [alias, stutter], "alias + stutter", "chain")
