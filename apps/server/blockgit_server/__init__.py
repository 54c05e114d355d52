"""BlockGit API server.

Flask application exposing the versioning engine as a JSON API.
"""
from __future__ import annotations

__version__ = "0.1.0"
