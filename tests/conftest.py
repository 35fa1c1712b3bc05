import json
import os
import stat
import sys
import textwrap
from pathlib import Path
from typing import Callable, Iterable, List

import pytest

from shaderbuild.config import BuildConfig

_FAKE_COMPILER = """\
#!{python}
import json
import os
import sys

args = sys.argv[1:]
stage = args[args.index("-stage") + 1]
dest = args[args.index("-o") + 1]
src = args[-1]

with open({log!r}, "a") as f:
    f.write(json.dumps(args) + "\\n")

if not os.path.exists(src):
    sys.stderr.write("error: cannot open source file " + src + "\\n")
    sys.exit(1)
if stage in {fail_stages!r}:
    sys.stderr.write(src + ": error in " + stage + " entry point\\n")
    sys.exit(1)
with open(dest, "w") as f:
    f.write(stage)
"""


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    """Skip tests that run shebang scripts as executables when the platform cannot."""
    if os.name == "posix":
        return

    skip_posix = pytest.mark.skip(reason="Requires POSIX executable scripts, skip test")
    for item in items:
        if any(item.iter_markers(name="requires_posix")):
            item.add_marker(skip_posix)


def _program_command(exit_code: int = 0) -> List[str]:
    return [sys.executable, "-c", f"import sys; sys.exit({exit_code})"]


@pytest.fixture
def compiler_calls(tmp_path: Path) -> Callable[[], List[List[str]]]:
    """Return a reader for the argument vectors received by the fake compiler."""

    def _read() -> List[List[str]]:
        log_path = tmp_path / "compiler.log"
        if not log_path.exists():
            return []
        return [json.loads(line) for line in log_path.read_text().splitlines() if line]

    return _read


@pytest.fixture
def program_command() -> Callable[[int], List[str]]:
    """Factory for a program-compiler command that exits with the given status."""
    return _program_command


@pytest.fixture
def make_fake_compiler(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an executable stand-in for the shader compiler.

    The script accepts the ``-stage/-entry/-o`` argument shape, exits 1 when the source is
    missing or the stage is listed in ``fail_stages``, and otherwise writes the output file. Each
    invocation's arguments are appended to ``compiler.log`` next to the script.
    """

    def _make(fail_stages: Iterable[str] = (), name: str = "fake_shaderc") -> Path:
        script = tmp_path / name
        script.write_text(
            _FAKE_COMPILER.format(
                python=sys.executable,
                log=str(tmp_path / "compiler.log"),
                fail_stages=list(fail_stages),
            )
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def shader_tree(tmp_path: Path) -> Path:
    """A shader root containing ``test.slang``."""
    root = tmp_path / "shaders"
    root.mkdir()
    (root / "test.slang").write_text(
        textwrap.dedent(
            """\
            [shader("vertex")] float4 vertex_main() : SV_Position { return 0; }
            [shader("fragment")] float4 fragment_main() : SV_Target { return 1; }
            """
        )
    )
    return root


@pytest.fixture
def build_config(tmp_path: Path, shader_tree: Path, make_fake_compiler) -> BuildConfig:
    """A config wired to the fake shader compiler and a succeeding program build."""
    return BuildConfig(
        shader_root=shader_tree,
        asset_root=tmp_path / "assets",
        shader_compiler=str(make_fake_compiler()),
        program_compiler=_program_command(0),
        program_output=tmp_path / "game7",
        wait_timeout=60.0,
    )
