"""Route blueprints for the BlockGit API server."""
from __future__ import annotations

from . import branch, commit

# Register all blueprints
blueprints = [
    commit.bp,
    branch.bp,
]


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    for bp in blueprints:
        app.register_blueprint(bp)
