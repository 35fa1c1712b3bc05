"""Turn registry entries into external compiler invocations.

Everything here is pure: paths are computed, never checked, and nothing is created on disk.
"""

from __future__ import annotations

from typing import List, Union

from shaderbuild.config import BuildConfig
from shaderbuild.data import CompileInvocation, ShaderStage, UnitRegistry


def synthesize(
    unit_name: str, stage: Union[ShaderStage, str], config: BuildConfig
) -> CompileInvocation:
    """Build the shader compiler invocation for one ``(unit, stage)`` pair.

    The argument vector is ``-stage <stage> -entry <entry> -o <dest> <src>``, where ``src`` is
    ``<shader_root>/<unit>.<language_ext>`` and ``dest`` is
    ``<asset_root>/shaders/<unit>.<suffix>.<binary_ext>``.

    Parameters
    ----------
    unit_name : str
        Base name of the shader unit.
    stage : Union[ShaderStage, str]
        Stage to compile.
    config : BuildConfig
        Supplies roots, extensions and the compiler executable.

    Returns
    -------
    CompileInvocation
        The invocation. Equal inputs always give equal invocations.

    Raises
    ------
    ValueError
        If ``stage`` is not a known stage. Callers only pass registry stages, so this signals a
        programming error.
    """
    stage = ShaderStage(stage)
    source = config.shader_root / f"{unit_name}.{config.language_ext}"
    destination = config.output_dir / f"{unit_name}.{stage.suffix}.{config.binary_ext}"
    arguments = (
        "-stage",
        stage.value,
        "-entry",
        stage.entry_point,
        "-o",
        str(destination),
        str(source),
    )
    return CompileInvocation(
        executable=config.shader_compiler,
        arguments=arguments,
        unit=unit_name,
        stage=stage,
        source=source,
        destination=destination,
    )


def synthesize_program_build(config: BuildConfig) -> CompileInvocation:
    """Build the program compiler invocation, with the debug flag in debug mode."""
    command = list(config.program_compiler)
    if config.mode == "debug":
        command.append(config.debug_flag)
    return CompileInvocation(executable=command[0], arguments=tuple(command[1:]))


def synthesize_all(registry: UnitRegistry, config: BuildConfig) -> List[CompileInvocation]:
    """Synthesize every shader invocation of the registry in vertex, fragment, compute order."""
    return [synthesize(name, stage, config) for name, stage in registry.pairs()]
