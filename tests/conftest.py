# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Global pytest configuration and fixtures.

Every test runs in an isolated environment: empty working directory, no
CLASSREG_* variables, fresh configuration and fresh registries. Registry
definitions (tags) are process-wide and persist, so tests that define ad hoc
registries use registry_name for a unique name.
"""

import os
import re

import pytest

from classreg.registry import reset_registry
from classreg.settings import reset_config


def pytest_configure(config):
    config.addinivalue_line("markers", "fast: Quick unit tests with no I/O")


@pytest.fixture(autouse=True)
def empty_env(tmp_path, monkeypatch):
    """Isolated CWD and environment with no classreg configuration.

    Yields the project directory; tests may write classreg.yaml into it.
    """
    for key in list(os.environ):
        if key.startswith("CLASSREG_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CLASSREG_PROJECT_DIR", str(tmp_path))

    reset_config()
    reset_registry()
    yield tmp_path
    reset_registry()
    reset_config()


@pytest.fixture
def write_config(empty_env):
    """Write classreg.yaml into the project directory and drop cached config."""

    def _write(text: str):
        path = empty_env / "classreg.yaml"
        path.write_text(text)
        reset_config()
        return path

    return _write


@pytest.fixture
def registry_name(request):
    """Registry name unique to the running test."""
    return re.sub(r"\W", "_", request.node.nodeid)
