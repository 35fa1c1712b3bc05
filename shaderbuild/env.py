"""Environment variables recognized by shaderbuild."""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import List, Optional


def get_shaderbuild_shader_root() -> Optional[Path]:
    """Directory holding the shader sources. Read from ``SHADERBUILD_SHADER_ROOT``."""
    value = os.environ.get("SHADERBUILD_SHADER_ROOT")
    return Path(value) if value else None


def get_shaderbuild_asset_root() -> Optional[Path]:
    """Asset directory receiving compiled shaders. Read from ``SHADERBUILD_ASSET_ROOT``."""
    value = os.environ.get("SHADERBUILD_ASSET_ROOT")
    return Path(value) if value else None


def get_shaderbuild_shader_compiler() -> Optional[str]:
    """Shader compiler executable. Read from ``SHADERBUILD_SHADER_COMPILER``."""
    return os.environ.get("SHADERBUILD_SHADER_COMPILER") or None


def get_shaderbuild_program_compiler() -> Optional[List[str]]:
    """Program compiler command line, split with shell rules. Read from
    ``SHADERBUILD_PROGRAM_COMPILER``."""
    value = os.environ.get("SHADERBUILD_PROGRAM_COMPILER")
    return shlex.split(value) if value else None


def get_shaderbuild_log_level() -> Optional[str]:
    """Logging verbosity. Read from ``SHADERBUILD_LOG_LEVEL``."""
    value = os.environ.get("SHADERBUILD_LOG_LEVEL")
    return value.upper() if value else None
