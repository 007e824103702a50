# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Registration module whose register_all() fails."""

calls = 0


def register_all():
    global calls
    calls += 1
    raise RuntimeError("backend library not installed")
