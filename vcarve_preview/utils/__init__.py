"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Config validation (validators)
    - Outline geometry (geometry)
    - Atomic I/O and YAML (fs)
    - Unified logging (logging_config)

No module in utils/ may import from vcarve_preview.carve.

Convenience imports:
    from vcarve_preview.utils import fs, geometry, validators
    from vcarve_preview.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import geometry
from . import logging_config
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'geometry',
    'logging_config',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
