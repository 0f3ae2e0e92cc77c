"""Filesystem helpers for program text and YAML configs.

Provides:
    - Text loading with a clear error for missing files
    - YAML loading via ``yaml.safe_load``

All paths use pathlib.Path.  The toolpath core never touches the
filesystem; only the importer and config loader call into this module.

Usage:
    from gcode_preview.utils import fs
    text = fs.read_text("part.nc")
    cfg = fs.load_yaml("configs/preview.v1.yaml")
"""

from pathlib import Path
from typing import Any, Dict, Union

import yaml


def read_text(path: Union[str, Path], encoding: str = "utf-8") -> str:
    """Read a text file.

    Parameters
    ----------
    path : Union[str, Path]
        File path
    encoding : str
        Text encoding, default "utf-8"; undecodable bytes are replaced

    Returns
    -------
    str
        File contents

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, 'r', encoding=encoding, errors='replace') as f:
        return f.read()


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content; an empty file yields an empty dict

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e

    return data if data is not None else {}
