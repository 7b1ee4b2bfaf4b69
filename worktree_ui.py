#!/usr/bin/env python3
"""Run worktree-ui from a source checkout without installing it.

    python worktree_ui.py list -b develop
"""

import sys
from worktree_ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
