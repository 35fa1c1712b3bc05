import argparse
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from shaderbuild.build import BuildRun
from shaderbuild.compile import EXIT_LAUNCH_FAILURE, EXIT_SUCCESS, LaunchError, report
from shaderbuild.config import BuildConfig
from shaderbuild.data import UnitRegistry
from shaderbuild.logging import configure_logging, get_logger

logger = get_logger("CLI")


def build(args: argparse.Namespace) -> int:
    """Run one build and return the process exit code."""
    try:
        if args.registry:
            registry = UnitRegistry.from_path(args.registry)
        else:
            registry = UnitRegistry.default()
        config = _make_config(args)
    except (ValidationError, OSError) as e:
        logger.error(f"Invalid build configuration:\n{e}")
        return EXIT_LAUNCH_FAILURE
    configure_logging(config.log_level)

    run = BuildRun(config, registry)
    if args.dry_run:
        run.dry_run()
        return EXIT_SUCCESS

    try:
        outcome = run.run()
    except LaunchError as e:
        logger.error(e.describe())
        logger.error("Build aborted")
        return EXIT_LAUNCH_FAILURE
    except OSError as e:
        logger.error(f"Invalid build configuration: {e}")
        return EXIT_LAUNCH_FAILURE
    return report(outcome)


def _make_config(args: argparse.Namespace) -> BuildConfig:
    program_compiler = shlex.split(args.program_compiler) if args.program_compiler else None
    return BuildConfig.from_env(
        mode=args.mode,
        log_level=args.log_level,
        shader_root=args.shader_root,
        asset_root=args.asset_root,
        shader_compiler=args.shader_compiler,
        program_compiler=program_compiler,
        program_output=args.program_output,
        program_build=args.program_build,
        launch_policy=args.launch_policy,
        wait_timeout=args.timeout,
    )


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shaderbuild",
        description="Compile shader assets and build the program in parallel",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "mode",
        nargs="?",
        choices=["debug", "release"],
        default="release",
        help="Program compilation mode (default: release).",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: SHADERBUILD_LOG_LEVEL or INFO).",
    )
    parser.add_argument(
        "--registry", type=Path, help="JSON file listing vertex, fragment and compute units."
    )
    parser.add_argument("--shader-root", type=Path, help="Directory of shader sources.")
    parser.add_argument("--asset-root", type=Path, help="Asset directory receiving shaders/.")
    parser.add_argument("--shader-compiler", help="Shader compiler executable.")
    parser.add_argument("--program-compiler", help="Program build command line.")
    parser.add_argument(
        "--program-output", type=Path, help="Program binary to delete before building."
    )
    parser.add_argument(
        "--program-build",
        choices=["concurrent", "after_shaders"],
        default="concurrent",
        help="Run the program build alongside the shaders or only after they all succeeded.",
    )
    parser.add_argument(
        "--launch-policy",
        choices=["fail_fast", "collect"],
        default="fail_fast",
        help="Abort on the first launch error, or attempt every launch and report all errors.",
    )
    parser.add_argument(
        "--timeout", type=float, help="Seconds to wait for all processes before terminating."
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the commands without running them."
    )
    parser.set_defaults(func=build)
    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or "INFO")
    return args.func(args)


def main() -> None:
    sys.exit(cli())
