"""Configuration for a build run."""

from __future__ import annotations

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from shaderbuild import env


class BuildConfig(BaseModel):
    """Configuration for one build run.

    Controls where sources and outputs live, which external tools are invoked and how launch
    errors, program-build ordering and hung processes are handled. All fields have defaults;
    ``from_env`` layers ``SHADERBUILD_*`` environment variables on top of them.
    """

    shader_root: Path = Path("shaders")
    """Directory holding one ``<unit>.<language_ext>`` source per shader unit."""
    asset_root: Path = Path("assets")
    """Asset directory. Compiled shaders are written to its ``shaders`` subdirectory."""
    language_ext: str = Field(default="slang", min_length=1)
    """Extension of shader source files, without the leading dot."""
    binary_ext: str = Field(default="spv", min_length=1)
    """Extension of compiled shader files, without the leading dot."""
    shader_compiler: str = Field(default="slangc", min_length=1)
    """Shader compiler executable."""
    program_compiler: List[str] = Field(
        default_factory=lambda: ["odin", "build", ".", "-out:game7"], min_length=1
    )
    """Command that builds the program, executable first."""
    debug_flag: str = Field(default="-debug", min_length=1)
    """Flag appended to ``program_compiler`` in debug mode."""
    program_output: Optional[Path] = Path("game7")
    """Program binary removed before the build starts so a failed build cannot leave a stale
    binary behind. Matches the output of the default ``program_compiler``. ``None`` disables the
    removal."""
    mode: Literal["debug", "release"] = "release"
    """Program compilation mode."""
    program_build: Literal["concurrent", "after_shaders"] = "concurrent"
    """Whether the program build runs alongside the shader compiles or only after all of them
    succeeded."""
    launch_policy: Literal["fail_fast", "collect"] = "fail_fast"
    """On a launch error, abort the run (``fail_fast``) or keep launching and collect every
    launch error (``collect``)."""
    wait_timeout: Optional[float] = Field(default=None, gt=0)
    """Overall deadline in seconds for the wait phase. Processes still running past it are
    terminated. ``None`` waits forever."""
    terminate_grace: float = Field(default=5.0, ge=0)
    """Seconds between terminating and killing a process that outlived the deadline."""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    """Logging verbosity."""

    @field_validator("language_ext", "binary_ext")
    @classmethod
    def _strip_leading_dot(cls, value: str) -> str:
        value = value.lstrip(".")
        if not value:
            raise ValueError("extension must not be empty")
        return value

    @property
    def output_dir(self) -> Path:
        """Directory receiving compiled shaders."""
        return self.asset_root / "shaders"

    @classmethod
    def from_env(cls, **overrides) -> "BuildConfig":
        """Build a config from defaults, ``SHADERBUILD_*`` variables and explicit overrides.

        Parameters
        ----------
        overrides
            Field values that take precedence over the environment. ``None`` values are
            ignored so that unset CLI flags do not mask the environment.

        Returns
        -------
        BuildConfig
            The validated configuration.
        """
        values = {
            "shader_root": env.get_shaderbuild_shader_root(),
            "asset_root": env.get_shaderbuild_asset_root(),
            "shader_compiler": env.get_shaderbuild_shader_compiler(),
            "program_compiler": env.get_shaderbuild_program_compiler(),
            "log_level": env.get_shaderbuild_log_level(),
        }
        values.update(overrides)
        return cls(**{k: v for k, v in values.items() if v is not None})
