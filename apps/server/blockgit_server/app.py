"""BlockGit API server - JSON interface to the versioning engine.

This Flask application exposes the versioning engine over HTTP:
- Commit operations (commit, list, checkout, reset, revert, delete)
- Branch operations (create, clone, delete, checkout, list)
- HEAD inspection

The application uses a modular architecture:
- Routes organized into blueprints by feature (commit, branch)
- One Repository per app, held in app.extensions and guarded by a request lock
- Optional state file written after every successful mutating request

Run with: blockgit-server [--state-dir DIR] [--host HOST] [--port PORT]

Examples:
    blockgit-server                       # Serve the repository found from the cwd
    blockgit-server --state-dir ./notes   # Serve the repository rooted at ./notes
    blockgit-server --port 8080           # Run on port 8080
"""
from __future__ import annotations

import argparse
import logging
import threading

from flask import Flask, g, request

from blockgit_core.config import configure_logging, load_settings
from blockgit_core.repository import Repository
from blockgit_core.storage import StateFile, find_state

from .routes import register_blueprints
from .utils import LOCK_KEY, REPOSITORY_KEY, STATE_FILE_KEY

logger = logging.getLogger(__name__)

MUTATING_METHODS = {'POST', 'PUT', 'PATCH', 'DELETE'}


def create_app(repository: Repository | None = None, state_file: StateFile | None = None) -> Flask:
    """Create the Flask app serving one repository.

    Args:
        repository: Engine to serve (a fresh one if omitted).
        state_file: Where to persist state after each successful change.

    Returns:
        Configured Flask app.
    """
    app = Flask(__name__)
    app.extensions[REPOSITORY_KEY] = repository if repository is not None else Repository()
    app.extensions[STATE_FILE_KEY] = state_file
    app.extensions[LOCK_KEY] = threading.Lock()

    register_blueprints(app)

    # Requests run one at a time; a mutation is saved before the lock is released.
    @app.before_request
    def acquire_repository():
        app.extensions[LOCK_KEY].acquire()
        g.blockgit_locked = True

    @app.teardown_request
    def release_repository(error=None):
        if g.pop('blockgit_locked', False):
            app.extensions[LOCK_KEY].release()

    @app.after_request
    def persist_state(response):
        state = app.extensions.get(STATE_FILE_KEY)
        if state is not None and request.method in MUTATING_METHODS and response.status_code < 400:
            state.save(app.extensions[REPOSITORY_KEY])
            logger.debug(f'Saved state to {state.path}')
        return response

    return app


def main():
    """Main entry point."""
    settings = load_settings()

    parser = argparse.ArgumentParser(description='BlockGit API server')
    parser.add_argument('--state-dir', '-s', type=str, help='Directory holding the repository (default: search from cwd)')
    parser.add_argument('--port', '-p', type=int, default=settings.port, help=f'Port to run on (default: {settings.port})')
    parser.add_argument('--host', type=str, default=settings.host, help=f'Host to bind to (default: {settings.host})')
    parser.add_argument('--init', action='store_true', help='Create the repository if none exists')
    args = parser.parse_args()

    configure_logging(settings.log_level)

    if args.state_dir:
        state = StateFile(args.state_dir, state_dir=settings.state_dir)
    else:
        state = find_state(state_dir=settings.state_dir)

    if state is not None and state.exists():
        repo = state.load(default_branch=settings.default_branch)
    elif args.init:
        state = state or StateFile('.', state_dir=settings.state_dir)
        repo = state.init(default_branch=settings.default_branch)
    else:
        parser.error("No BlockGit repository found (run 'blockgit init' or pass --init)")

    print('\nBlockGit API server')
    print(f'   State: {state.path}')
    print(f'   URL: http://{args.host}:{args.port}/api/git')
    print('\n   Press Ctrl+C to stop\n')

    create_app(repo, state).run(host=args.host, port=args.port, debug=False)


if __name__ == '__main__':
    main()
