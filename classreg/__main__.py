# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from classreg.cli import main

if __name__ == "__main__":
    main()
