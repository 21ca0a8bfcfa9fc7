"""YAML schema validation and config loading.

Provides validation for the preview configuration using pydantic:
    - Preview schema (preview.v1.yaml): tool angle, pixels per inch,
      render mode, output formatting

Configs are validated when loaded so that a bad tool angle or an unknown
render mode fails before any G-code is read.

Units:
    - Tool angle: degrees, full included angle of the V-bit
    - Resolution: pixels per inch

Usage:
    from vcarve_preview.utils import validators

    cfg = validators.load_preview_config("configs/preview.v1.yaml")
    cfg = validators.PreviewV1(tool_angle_deg=60.0, render_mode="dots")
"""

from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, field_validator

RENDER_MODES = ("dots", "trapezoids", "full")


# ============================================================================
# PREVIEW SCHEMA V1
# ============================================================================

class PreviewV1(BaseModel):
    """Preview configuration (preview.v1.yaml schema).

    The tool angle is the included angle of the V-bit; the groove width per
    unit of depth is ``2 * tan(tool_angle_deg / 2)``.
    """
    schema_version: str = Field("preview.v1", alias="schema", description="Schema version")
    tool_angle_deg: float = Field(30.0, gt=0.0, lt=180.0, description="V-bit included angle (deg)")
    ppi: float = Field(100.0, gt=0.0, description="Output resolution (pixels per inch)")
    render_mode: str = Field("trapezoids", description="Stroke rendering strategy")
    pretty: bool = Field(True, description="One SVG element per line")
    decimals: int = Field(1, ge=0, le=6, description="Fixed-point digits for coordinates")

    model_config = {"populate_by_name": True}

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "preview.v1":
            raise ValueError(f"Expected schema 'preview.v1', got '{v}'")
        return v

    @field_validator('render_mode')
    @classmethod
    def validate_render_mode(cls, v: str) -> str:
        v = v.lower()
        if v not in RENDER_MODES:
            raise ValueError(f"render_mode must be one of {RENDER_MODES}, got {v}")
        return v


def load_preview_config(path: Union[str, Path]) -> PreviewV1:
    """Load and validate preview config from YAML.

    Parameters
    ----------
    path : str or Path
        Path to a preview.v1.yaml file

    Returns
    -------
    PreviewV1
        Validated config model

    Raises
    ------
    ValueError
        If config is invalid (pydantic.ValidationError) or not a mapping
    FileNotFoundError
        If file does not exist
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Preview config not found: {path}")

    cfg = fs.load_yaml(path)
    if not isinstance(cfg, dict):
        raise ValueError(f"Preview config must be a mapping: {path}")
    return PreviewV1(**cfg)
