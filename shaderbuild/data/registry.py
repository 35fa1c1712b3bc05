"""Strong-typed shader unit registry."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterator, List, Tuple, Union

from pydantic import Field, model_validator

from .utils import BaseModelWithDocstrings, UnitName


class ShaderStage(str, Enum):
    """Pipeline stages a shader unit can implement.

    Each stage carries a fixed entry-point symbol and the suffix used in compiled output names.
    """

    VERTEX = "vertex"
    """Vertex stage. Entry point ``vertex_main``, output suffix ``vert``."""
    FRAGMENT = "fragment"
    """Fragment stage. Entry point ``fragment_main``, output suffix ``frag``."""
    COMPUTE = "compute"
    """Compute stage. Entry point ``compute_main``, output suffix ``comp``."""

    @property
    def entry_point(self) -> str:
        return _ENTRY_POINTS[self]

    @property
    def suffix(self) -> str:
        return _SUFFIXES[self]


_ENTRY_POINTS = {
    ShaderStage.VERTEX: "vertex_main",
    ShaderStage.FRAGMENT: "fragment_main",
    ShaderStage.COMPUTE: "compute_main",
}

_SUFFIXES = {
    ShaderStage.VERTEX: "vert",
    ShaderStage.FRAGMENT: "frag",
    ShaderStage.COMPUTE: "comp",
}


class UnitRegistry(BaseModelWithDocstrings):
    """The set of shader units to compile, one ordered list per stage.

    A unit that implements several stages appears in several lists; all of its stages are
    compiled from the same source file. Order within a list is the order in which the
    invocations are synthesized and launched.
    """

    vertex: List[UnitName] = Field(default_factory=list)
    """Units with a ``vertex_main`` entry point."""
    fragment: List[UnitName] = Field(default_factory=list)
    """Units with a ``fragment_main`` entry point."""
    compute: List[UnitName] = Field(default_factory=list)
    """Units with a ``compute_main`` entry point."""

    @model_validator(mode="after")
    def _validate_unit_names(self) -> "UnitRegistry":
        """Reject names that would make two invocations write the same output file.

        Raises
        ------
        ValueError
            If a stage list contains the same unit twice, or a unit name is ``..``/``.``.
        """
        for stage in ShaderStage:
            seen = set()
            for name in self.units_for(stage):
                if name in (".", ".."):
                    raise ValueError(f"Invalid unit name '{name}' in {stage.value} list")
                if name in seen:
                    raise ValueError(
                        f"Duplicate unit '{name}' in {stage.value} list: both invocations "
                        f"would write the same {stage.suffix} output"
                    )
                seen.add(name)
        return self

    @classmethod
    def default(cls) -> "UnitRegistry":
        """The built-in registry shipped with the engine.

        Returns
        -------
        UnitRegistry
            A registry with unit ``test`` in the vertex and fragment lists and no compute units.
        """
        return cls(vertex=["test"], fragment=["test"], compute=[])

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "UnitRegistry":
        """Load a registry from a JSON file of the form
        ``{"vertex": [...], "fragment": [...], "compute": [...]}``.

        Parameters
        ----------
        path : Union[str, Path]
            Path of the registry file. Missing keys mean empty lists.

        Returns
        -------
        UnitRegistry
            The validated registry.

        Raises
        ------
        pydantic.ValidationError
            If the file content is malformed or contains duplicate units.
        OSError
            If the file cannot be read.
        """
        return cls.model_validate_json(Path(path).read_text())

    def units_for(self, stage: Union[ShaderStage, str]) -> List[str]:
        """Return the ordered unit names for one stage."""
        return getattr(self, ShaderStage(stage).value)

    def pairs(self) -> Iterator[Tuple[str, ShaderStage]]:
        """Yield every ``(unit, stage)`` pair in vertex, fragment, compute order."""
        for stage in ShaderStage:
            for name in self.units_for(stage):
                yield name, stage
