"""Data layer with strongly-typed models for shaderbuild."""

from .invocation import PROGRAM_BUILD_LABEL, CompileInvocation
from .registry import ShaderStage, UnitRegistry
from .utils import BaseModelWithDocstrings, NonEmptyString, UnitName

__all__ = [
    "BaseModelWithDocstrings",
    "CompileInvocation",
    "NonEmptyString",
    "PROGRAM_BUILD_LABEL",
    "ShaderStage",
    "UnitName",
    "UnitRegistry",
]
