"""BlockGit CLI Application.

Command-line interface for Git-like version control of item trees.

Execution Context:
    CLI application - invoked from terminal

Dependencies:
    - click: CLI framework
    - rich: Terminal formatting
    - blockgit_core: Core library

Metadata:
    Version: 0.1.0
    Author: BlockGit Team
"""
from __future__ import annotations

__version__ = "0.1.0"
