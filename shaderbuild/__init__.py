from shaderbuild.data import CompileInvocation, ShaderStage, UnitRegistry
from shaderbuild.logging import configure_logging, get_logger
from shaderbuild.config import BuildConfig
from shaderbuild.compile import (
    LaunchError,
    ProcessHandle,
    ProcessResult,
    RunOutcome,
    launch,
    launch_all,
    report,
    supervise,
    synthesize,
    synthesize_program_build,
)
from shaderbuild.build import BuildRun

__all__ = [
    # Main classes
    "BuildRun",
    "BuildConfig",
    # Registry and invocations
    "ShaderStage",
    "UnitRegistry",
    "CompileInvocation",
    # Pipeline steps
    "synthesize",
    "synthesize_program_build",
    "launch",
    "launch_all",
    "supervise",
    "report",
    # Process and result types
    "ProcessHandle",
    "ProcessResult",
    "RunOutcome",
    "LaunchError",
    "configure_logging",
    "get_logger",
]
