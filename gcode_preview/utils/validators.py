"""YAML schema validation for preview configuration.

Provides the pydantic model for ``preview.v1.yaml``:
    - Tessellation: arc chord length, full-circle tolerance
    - Reader: strict mode for malformed motion lines
    - Logging: level, optional file, JSON/colour output

Units:
    - Geometry: millimeters (mm)

Usage:
    from gcode_preview.utils import validators

    cfg = validators.load_preview_config("configs/preview.v1.yaml")
    cfg = validators.PreviewConfigV1()   # built-in defaults
"""

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ConfigError(ValueError):
    """Raised when a config file fails validation."""

    pass


# ============================================================================
# PREVIEW SCHEMA V1
# ============================================================================

class TessellationConfig(BaseModel):
    """Arc flattening parameters."""
    model_config = ConfigDict(extra="forbid")

    arc_resolution_mm: float = Field(0.5, gt=0.0, le=100.0, description="Max chord length (mm)")
    full_circle_tol_mm: float = Field(1e-9, ge=0.0, le=1.0, description="Start/end coincidence tolerance (mm)")


class ReaderConfig(BaseModel):
    """G-code reader behaviour."""
    model_config = ConfigDict(extra="forbid")

    strict: bool = Field(False, description="Raise on malformed motion lines instead of skipping")


class LoggingConfig(BaseModel):
    """Arguments for logging_config.setup_logging()."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    log_level: str = Field("INFO", description="Root log level")
    log_file: Optional[str] = Field(None, description="Log file path, None for console only")
    json_format: bool = Field(False, alias="json", description="JSON lines output")
    color: bool = Field(True, description="ANSI colours on console")

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v


class PreviewConfigV1(BaseModel):
    """Complete preview configuration (preview.v1.yaml schema)."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field("preview.v1", alias="schema", description="Schema version")
    tessellation: TessellationConfig = Field(default_factory=TessellationConfig)
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "preview.v1":
            raise ValueError(f"Expected schema 'preview.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_preview_config(path: Union[str, Path]) -> PreviewConfigV1:
    """Load and validate preview config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to preview.v1.yaml file

    Returns
    -------
    PreviewConfigV1
        Validated configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ConfigError
        If validation fails (message names the file and offending keys)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Preview config not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ConfigError(f"Preview config at {path} must be a mapping, got {type(data).__name__}")
    try:
        return PreviewConfigV1(**data)
    except ValidationError as e:
        raise ConfigError(f"Preview config validation failed at {path}: {e}") from e
