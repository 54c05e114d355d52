"""Utility functions for the BlockGit API server."""
from __future__ import annotations

import logging

from flask import current_app, jsonify, request

from blockgit_core.errors import NotFoundError, VersioningError
from blockgit_core.repository import Repository

logger = logging.getLogger(__name__)

REPOSITORY_KEY = 'blockgit'
STATE_FILE_KEY = 'blockgit.state_file'
LOCK_KEY = 'blockgit.lock'


def get_repo() -> Repository:
    """Get the repository owned by the running app."""
    return current_app.extensions[REPOSITORY_KEY]


def get_payload() -> dict:
    """Get the JSON request body, or an empty dict."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def current_branch_payload(repo: Repository) -> dict | None:
    branch = repo.get_current_branch()
    return branch.to_dict() if branch else None


def head_payload(repo: Repository) -> dict | None:
    head = repo.get_head()
    return head.to_dict() if head else None


def commits_payload(repo: Repository) -> list[dict]:
    return [c.to_dict() for c in repo.list_commits()]


def branches_payload(repo: Repository) -> list[dict]:
    return [b.to_dict() for b in repo.list_branches()]


def error_response(error: Exception):
    """Translate an exception into a JSON error response.

    Not-found errors map to 404, other validation errors to 400.
    Anything else is logged and reported as 500.
    """
    if isinstance(error, NotFoundError):
        status = 404
    elif isinstance(error, (VersioningError, ValueError, TypeError, KeyError)):
        status = 400
    else:
        logger.exception(f'Unexpected error handling {request.method} {request.path}')
        status = 500
    return jsonify({'error': str(error)}), status
