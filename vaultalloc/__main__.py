# SPDX-License-Identifier: MIT
import sys

from vaultalloc.cli import main

sys.exit(main(sys.argv[1:]))
