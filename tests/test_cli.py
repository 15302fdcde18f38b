# tests/test_cli.py

"""
Tests for the aaarg CLI commands.
"""

import pytest
import numpy as np
from numpy.testing import assert_array_equal
from pathlib import Path
from click.testing import CliRunner

from aaarg.cli.main import cli
from aaarg.config import AaargConfig
from aaarg.core.buffer import OutputBuffer
from aaarg.core.source import SampleSource
from aaarg.version import __version__

# --- Test Fixtures ---

@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()

@pytest.fixture
def config() -> AaargConfig:
    return AaargConfig()

@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    path = tmp_path / "input.wav"
    path.touch()
    return path

@pytest.fixture
def mock_io(mocker):
    """Mocks load_source with a 4 s mono ramp at 1 kHz, and save_buffer."""
    def _source(*args, **kwargs):
        return SampleSource(np.arange(4000, dtype=np.float64), sample_rate=1000)
    mock_load = mocker.patch("aaarg.cli.effects_cmd.load_source", side_effect=_source)
    mock_save = mocker.patch("aaarg.cli.effects_cmd.save_buffer")
    return mock_load, mock_save


def _saved_buffer(mock_save) -> OutputBuffer:
    mock_save.assert_called_once()
    buffer = mock_save.call_args[0][0]
    assert isinstance(buffer, OutputBuffer)
    return buffer

# --- Test Cases ---

def test_cli_help(runner: CliRunner):
    result = runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "Commands:" in result.output
    for command in ("alias", "stutter", "chain"):
        assert command in result.output

def test_cli_version(runner: CliRunner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert f"aaarg, version {__version__}" in result.output.lower()

def test_alias_cmd(runner, config, mock_io, input_file, tmp_path):
    mock_load, mock_save = mock_io
    output_file = tmp_path / "out.wav"
    args = ["alias", str(input_file), "-o", str(output_file), "--factor", "2", "--duration", "0.25"]
    result = runner.invoke(cli, args, obj={"config": config})

    assert result.exit_code == 0, result.output
    assert "Successfully applied alias" in result.output
    mock_load.assert_called_once_with(input_file.resolve())
    buffer = _saved_buffer(mock_save)
    assert_array_equal(buffer.samples, np.arange(0, 2000, 2))
    assert (buffer.channels, buffer.sample_rate) == (2, 44100)
    assert mock_save.call_args[0][1] == output_file.resolve()
    assert mock_save.call_args[1]["subtype"] == "FLOAT"

def test_alias_cmd_uses_config_defaults(runner, mock_io, input_file, tmp_path):
    _, mock_save = mock_io
    config = AaargConfig(parameters={"alias": {"factor": 4, "target_duration": 0.25}},
                         defaults={"preserve_metadata": True})
    result = runner.invoke(cli, ["alias", str(input_file), "-o", str(tmp_path / "out.wav")],
                           obj={"config": config})

    assert result.exit_code == 0, result.output
    buffer = _saved_buffer(mock_save)
    assert_array_equal(buffer.samples, np.arange(0, 4000, 4))
    assert (buffer.channels, buffer.sample_rate) == (1, 1000)

def test_alias_cmd_seeded_jitter_is_reproducible(runner, config, mock_io, input_file, tmp_path):
    _, mock_save = mock_io
    args = ["alias", str(input_file), "-o", str(tmp_path / "out.wav"),
            "--factor", "3", "--variation", "2", "--duration", "0.5", "--seed", "11"]
    runner.invoke(cli, args, obj={"config": config})
    runner.invoke(cli, args, obj={"config": config})
    first, second = (call[0][0] for call in mock_save.call_args_list)
    assert_array_equal(first.samples, second.samples)

def test_alias_cmd_invalid_factor(runner, config, mock_io, input_file, tmp_path):
    _, mock_save = mock_io
    result = runner.invoke(cli, ["alias", str(input_file), "-o", str(tmp_path / "out.wav"), "--factor", "0"],
                           obj={"config": config})
    assert result.exit_code == 2
    assert "factor" in result.output
    mock_save.assert_not_called()

def test_stutter_cmd(runner, config, mock_io, input_file, tmp_path):
    _, mock_save = mock_io
    args = ["stutter", str(input_file), "-o", str(tmp_path / "out.wav"),
            "--count", "1", "3", "--stutter-duration", "0.1", "0.2", "--piece-length", "0.01", "0.02",
            "--seed", "5", "--preserve-metadata"]
    result = runner.invoke(cli, args, obj={"config": config})

    assert result.exit_code == 0, result.output
    buffer = _saved_buffer(mock_save)
    assert len(buffer) == 4000
    assert (buffer.channels, buffer.sample_rate) == (1, 1000)
    assert not np.array_equal(buffer.samples, np.arange(4000))

def test_stutter_cmd_too_long(runner, config, mock_io, input_file, tmp_path):
    _, mock_save = mock_io
    args = ["stutter", str(input_file), "-o", str(tmp_path / "out.wav"),
            "--count", "1", "1", "--stutter-duration", "10", "10", "--piece-length", "0.1", "0.1"]
    result = runner.invoke(cli, args, obj={"config": config})
    assert result.exit_code == 2
    assert "Error during stutter" in result.output
    mock_save.assert_not_called()

def test_stutter_cmd_invalid_range(runner, config, mock_io, input_file, tmp_path):
    args = ["stutter", str(input_file), "-o", str(tmp_path / "out.wav"), "--count", "3", "1"]
    result = runner.invoke(cli, args, obj={"config": config})
    assert result.exit_code == 2
    assert "stutter_count" in result.output

def test_chain_cmd(runner, config, mock_io, input_file, tmp_path):
    _, mock_save = mock_io
    args = ["chain", str(input_file), "-o", str(tmp_path / "out.wav"),
            "--factor", "2", "--duration", "0.25",
            "--count", "2", "2", "--stutter-duration", "0.05", "0.05", "--piece-length", "0.01", "0.01",
            "--seed", "3", "--preserve-metadata"]
    result = runner.invoke(cli, args, obj={"config": config})

    assert result.exit_code == 0, result.output
    assert "alias + stutter" in result.output
    buffer = _saved_buffer(mock_save)
    assert len(buffer) == 1000
    assert np.all(np.isin(buffer.samples, np.arange(0, 2000, 2)))

def test_alias_cmd_default_output_dir(runner, mock_io, input_file, tmp_path):
    _, mock_save = mock_io
    out_dir = tmp_path / "results"
    config = AaargConfig(paths={"output_dir": str(out_dir)})
    result = runner.invoke(cli, ["alias", str(input_file), "--factor", "2", "--duration", "0.25"],
                           obj={"config": config})

    assert result.exit_code == 0, result.output
    _saved_buffer(mock_save)
    assert mock_save.call_args[0][1] == out_dir.resolve() / "input_alias.wav"

def test_chain_cmd_default_output_name(runner, mock_io, input_file, tmp_path):
    _, mock_save = mock_io
    config = AaargConfig(paths={"output_dir": str(tmp_path)})
    result = runner.invoke(cli, ["chain", str(input_file), "--factor", "2", "--duration", "0.25"],
                           obj={"config": config})

    assert result.exit_code == 0, result.output
    assert mock_save.call_args[0][1] == tmp_path.resolve() / "input_chain.wav"
