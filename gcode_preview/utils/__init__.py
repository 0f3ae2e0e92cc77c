"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Config validation (validators)
    - File and YAML loading (fs)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (motion, toolpath, importer).

Convenience imports:
    from gcode_preview.utils import fs, validators
    from gcode_preview.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import logging_config
from . import validators

from .logging_config import get_logger, pop_context, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'logging_config',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
    'pop_context',
]
