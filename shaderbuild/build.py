"""One full build run: registry in, outcome out."""

from __future__ import annotations

import logging
from typing import List, Optional

from shaderbuild.compile import (
    LaunchBatch,
    RunOutcome,
    launch_all,
    supervise,
    synthesize_all,
    synthesize_program_build,
)
from shaderbuild.config import BuildConfig
from shaderbuild.data import CompileInvocation, UnitRegistry
from shaderbuild.logging import get_logger


class BuildRun:
    """Compile every shader of a registry and build the program.

    Shader compiles are launched together and drained afterwards. The program build is either
    launched with them (``program_build="concurrent"``) or only after every shader compiled
    successfully (``program_build="after_shaders"``).
    """

    def __init__(
        self,
        config: Optional[BuildConfig] = None,
        registry: Optional[UnitRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._config = config if config is not None else BuildConfig()
        self._registry = registry if registry is not None else UnitRegistry.default()
        self._logger = logger or get_logger("Build")

    @property
    def config(self) -> BuildConfig:
        return self._config

    @property
    def registry(self) -> UnitRegistry:
        return self._registry

    def invocations(self) -> List[CompileInvocation]:
        """Every invocation of the run: shaders in registry order, then the program build."""
        return synthesize_all(self._registry, self._config) + [
            synthesize_program_build(self._config)
        ]

    def run(self) -> RunOutcome:
        """Execute the run and wait for every launched process.

        Returns
        -------
        RunOutcome
            One result per launched process, plus collected launch errors and skipped
            invocations.

        Raises
        ------
        LaunchError
            Under the ``fail_fast`` launch policy, when a process could not be created. The
            processes already started are stopped before the error propagates.
        """
        shaders = synthesize_all(self._registry, self._config)
        program = synthesize_program_build(self._config)
        self._logger.info(
            f"Building {len(shaders)} shader(s) and the program "
            f"({self._config.mode}, program build {self._config.program_build})"
        )
        self._prepare_outputs()

        if self._config.program_build == "concurrent":
            batch = self._launch(shaders + [program])
            return self._drain(batch, RunOutcome(launch_errors=list(batch.errors)))

        batch = self._launch(shaders)
        outcome = self._drain(batch, RunOutcome(launch_errors=list(batch.errors)))
        if not outcome.succeeded:
            self._logger.warning("Shader compilation failed, skipping the program build")
            outcome.skipped.append(program)
            return outcome
        batch = self._launch([program])
        outcome.launch_errors.extend(batch.errors)
        return self._drain(batch, outcome)

    def dry_run(self) -> List[CompileInvocation]:
        """Log every invocation of the run without launching anything."""
        invocations = self.invocations()
        for invocation in invocations:
            self._logger.info(f"{invocation.label}: {' '.join(invocation.argv)}")
        return invocations

    def _prepare_outputs(self) -> None:
        output_dir = self._config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        stale = self._config.program_output
        if stale is not None and stale.exists():
            self._logger.debug(f"Removing stale program binary {stale}")
            stale.unlink()

    def _launch(self, invocations: List[CompileInvocation]) -> LaunchBatch:
        return launch_all(
            invocations, policy=self._config.launch_policy, grace=self._config.terminate_grace
        )

    def _drain(self, batch: LaunchBatch, outcome: RunOutcome) -> RunOutcome:
        return supervise(
            batch.handles,
            timeout=self._config.wait_timeout,
            grace=self._config.terminate_grace,
            outcome=outcome,
        )
