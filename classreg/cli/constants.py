# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from enum import IntEnum

# ============================================================================
# CLI Names
# ============================================================================

CLI_NAME = "classreg"
PACKAGE_NAME = "classreg"

# ============================================================================
# Exit Codes (BSD sysexits.h where applicable)
# ============================================================================


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
    USAGE = 64
    DATAERR = 65
    SOFTWARE = 70
    CONFIG = 78
    INTERRUPTED = 130  # Standard SIGINT exit code
