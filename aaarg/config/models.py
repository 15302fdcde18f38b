# aaarg/config/models.py

"""
Pydantic models for the structure and validation of the aaarg configuration (aaarg.toml).
Uses Pydantic V2 syntax.
"""

from pathlib import Path
from typing import Any, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _resolve_path(path: Union[str, Path]) -> Path:
    """Resolves and expands user paths."""
    return Path(path).expanduser().resolve()


class DefaultsConfig(BaseModel):
    """Default output behaviour."""
    preserve_metadata: bool = Field(False, description="Keep the source's channel count and sample rate instead of stamping 2 ch / 44100 Hz.")
    output_subtype: str = Field("FLOAT", description="Soundfile subtype for written audio (e.g. 'FLOAT', 'PCM_16').")


class PathsConfig(BaseModel):
    """Configuration for file paths used by aaarg."""
    output_dir: Path = Field(default=Path("./aaarg_output"), description="Default directory for saving results.")
    log_directory: Path = Field(default=Path("./aaarg_logs"), description="Directory for log files.")

    @field_validator('output_dir', 'log_directory', mode='before')
    @classmethod
    def resolve_paths_before_validation(cls, value: Any) -> Any:
        if isinstance(value, (str, Path)):
            return _resolve_path(value)
        return value


class AliasParams(BaseModel):
    """Default parameters for the alias block."""
    factor: int = Field(1, ge=1, description="Speed-up factor.")
    factor_variation: int = Field(0, ge=0, description="Maximum random deviation of each step.")
    target_duration: float = Field(1.0, ge=0, description="Maximum output duration in seconds.")


class StutterParams(BaseModel):
    """Default parameters for the stutter block. Ranges are inclusive [low, high]."""
    stutter_count: Tuple[int, int] = (0, 0)
    stutter_duration: Tuple[float, float] = (0.0, 0.0)
    stutter_piece_length: Tuple[float, float] = (0.0, 0.0)

    @model_validator(mode='after')
    def check_ranges(self) -> 'StutterParams':
        for name in ('stutter_count', 'stutter_duration', 'stutter_piece_length'):
            low, high = getattr(self, name)
            if low < 0 or low > high:
                raise ValueError(f"Invalid range for {name}: ({low}, {high}).")
        return self


class ParametersConfig(BaseModel):
    """Default parameters for each signal block."""
    alias: AliasParams = Field(default_factory=AliasParams)
    stutter: StutterParams = Field(default_factory=StutterParams)


class LoggingConfig(BaseModel):
    """Logging configuration settings."""
    log_file_enabled: bool = Field(False, description="Enable/disable persistent file logging.")
    log_filename_template: str = Field("aaarg_run_{timestamp:%Y%m%d_%H%M%S}.log", description="Naming pattern for log files.")
    log_level_file: str = Field("DEBUG", description="Minimum level for file logs.")
    log_format: str = Field("%(asctime)s [%(levelname)-8s] %(name)-30s - %(message)s (%(filename)s:%(lineno)d)", description="Format string for file log entries.")

    @field_validator('log_level_file')
    @classmethod
    def check_log_level(cls, value: str) -> str:
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in allowed_levels:
            raise ValueError(f"Invalid log level '{value}'. Must be one of {allowed_levels}")
        return upper_value


class AaargConfig(BaseModel):
    """Root configuration model for aaarg."""
    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True
    )

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    parameters: ParametersConfig = Field(default_factory=ParametersConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
