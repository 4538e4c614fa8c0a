"""Shared test fixtures for openapi-slicer.

Provides reusable fixtures for loading the fixture documents, writing them
to temporary files in either format, isolating configuration, managing
output state, and running the CLI.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

from openapi_slicer.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during a
    test, the cached references go stale once the test finishes.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw document fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Load the three-path petstore document."""
    with open(FIXTURES_DIR / "petstore.json") as f:
        return json.load(f)


@pytest.fixture
def bookstore_raw() -> dict[str, Any]:
    """Load the bookstore document (cycles, dangling refs, request bodies)."""
    with open(FIXTURES_DIR / "bookstore.yaml") as f:
        return yaml.safe_load(f)


@pytest.fixture
def bookstore_path() -> Path:
    """Path to the bookstore YAML fixture."""
    return FIXTURES_DIR / "bookstore.yaml"


# ---------------------------------------------------------------------------
# Documents written to disk
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_json(tmp_path: Path, petstore_raw: dict[str, Any]) -> Path:
    """The petstore document written to ``tmp_path/test_spec.json``."""
    path = tmp_path / "test_spec.json"
    path.write_text(json.dumps(petstore_raw), encoding="utf-8")
    return path


@pytest.fixture
def petstore_yaml(tmp_path: Path, petstore_raw: dict[str, Any]) -> Path:
    """The petstore document written to ``tmp_path/test_spec.yaml``."""
    path = tmp_path / "test_spec.yaml"
    path.write_text(yaml.safe_dump(petstore_raw, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def write_document(tmp_path: Path):
    """Factory that writes a dict to ``tmp_path/<name>`` as JSON or YAML."""

    def _write(document: dict[str, Any], name: str = "spec.json") -> Path:
        path = tmp_path / name
        if name.endswith(".json"):
            path.write_text(json.dumps(document), encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of
    tmp_path, clears all OPENAPI_SLICER_* environment variables, and
    changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("openapi_slicer.config._is_xdg_platform", lambda: True)

    for var in [
        "OPENAPI_SLICER_STRICT",
        "OPENAPI_SLICER_INDENT",
        "OPENAPI_SLICER_FORMAT",
        "NO_COLOR",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, JSON-format OutputManager for the duration of a test."""
    output = OutputManager(format=OutputFormat.JSON, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
