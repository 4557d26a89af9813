"""Shared fixtures: fake test runners built from small Python scripts."""

import sys
import textwrap

import pytest
import yaml

from cargo_testdox.config import AppConfig, RunnerConfig, OutputConfig


def script_command(source: str) -> list:
    """Command that runs ``source`` with the current interpreter."""
    return [sys.executable, "-c", textwrap.dedent(source)]


def printing_script(lines, exit_code=0) -> str:
    return f"""
import sys
for line in {list(lines)!r}:
    print(line)
sys.stdout.flush()
sys.exit({exit_code})
"""


CARGO_OUTPUT = [
    "",
    "running 5 tests",
    "test foo::tests::it_works ... ok",
    "test src/lib.rs - find_top_n_largest_files (line 17) ... ok",
    "test parse_line_fn_parses_a_line ... FAILED",
    "test files::test::sorts_files_in_descending_order ... ignored",
    "",
    "failures:",
    "",
    "test result: FAILED. 1 passed; 1 failed; 1 ignored; 0 measured; 0 filtered out; finished in 0.00s",
]

RENDERED_OUTPUT = "\n".join([
    "",
    "running 5 tests",
    " ✔ it works",
    " x parse_line parses a line",
    " ? sorts files in descending order",
    "",
    "failures:",
    "",
    "test result: FAILED. 1 passed; 1 failed; 1 ignored; 0 measured; 0 filtered out; finished in 0.00s",
]) + "\n"


@pytest.fixture
def make_config():
    def _make(command, **output):
        return AppConfig(
            runner=RunnerConfig(command=command),
            output=OutputConfig(color="never", **output),
        )
    return _make


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Write a YAML config for ``command`` and point CARGO_TESTDOX_CONFIG at it."""

    def _write(command, **output):
        path = tmp_path / "testdox.yaml"
        data = {"runner": {"command": command}, "output": {"color": "never", **output}}
        path.write_text(yaml.safe_dump(data))
        monkeypatch.setenv("CARGO_TESTDOX_CONFIG", str(path))
        return path

    return _write
