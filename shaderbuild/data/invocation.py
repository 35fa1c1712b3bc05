"""Fully-specified external command lines derived from the registry."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from .registry import ShaderStage
from .utils import FrozenModelWithDocstrings, NonEmptyString

PROGRAM_BUILD_LABEL = "main build"
"""Label of the single invocation that builds the program rather than a shader."""


class CompileInvocation(FrozenModelWithDocstrings):
    """One external compiler command.

    Shader invocations carry the unit, stage and the source/destination paths they were derived
    from. The program-build invocation has no stage and no paths.
    """

    executable: NonEmptyString
    """Executable name or path, resolved through ``PATH`` by the OS."""
    arguments: Tuple[str, ...] = ()
    """Ordered arguments passed after the executable."""
    unit: NonEmptyString = PROGRAM_BUILD_LABEL
    """Shader unit base name, or ``"main build"`` for the program build."""
    stage: Optional[ShaderStage] = None
    """Stage compiled by this invocation. ``None`` for the program build."""
    source: Optional[Path] = None
    """Shader source file consumed by the compiler."""
    destination: Optional[Path] = None
    """Compiled shader file produced by the compiler."""

    @property
    def is_program_build(self) -> bool:
        return self.stage is None

    @property
    def argv(self) -> List[str]:
        """The complete argument vector, executable first."""
        return [self.executable, *self.arguments]

    @property
    def label(self) -> str:
        """Human-readable identity used in logs and reports, e.g. ``test [fragment]``."""
        if self.stage is None:
            return self.unit
        return f"{self.unit} [{self.stage.value}]"

    def __str__(self) -> str:
        return self.label
