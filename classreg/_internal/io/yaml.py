# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Reading classreg.yaml.

load_config_file() returns the file's top-level mapping with ${VAR} / $VAR
references expanded. Syntax errors are re-raised with the file name and the
line and column of the problem.
"""

import os
from pathlib import Path
from typing import Any

import yaml


def _expand_env_vars(data: Any) -> Any:
    # Undefined variables are left as written
    if isinstance(data, str):
        return os.path.expandvars(data)
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    return data


def _describe_location(error: yaml.YAMLError) -> str:
    mark = getattr(error, "problem_mark", None)
    if mark is None:
        return "unknown location"
    return f"line {mark.line + 1}, column {mark.column + 1}"


def load_config_file(file_path: str | Path) -> dict[str, Any]:
    """Load a classreg config file as a mapping with env vars expanded.

    An empty file yields an empty mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file has syntax errors or isn't a mapping
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    try:
        with open(file_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(
            f"\n\nInvalid YAML in config file: {file_path}\n"
            f"Error at {_describe_location(e)}: {getattr(e, 'problem', None) or e}\n\n"
            f"Fix the syntax error and try again."
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise yaml.YAMLError(
            f"Config file {file_path} must contain a mapping, got {type(data).__name__}"
        )
    return _expand_env_vars(data)
