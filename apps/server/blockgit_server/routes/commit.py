"""Commit route handlers."""
from __future__ import annotations

from flask import Blueprint, jsonify

from ..utils import commits_payload, error_response, get_payload, get_repo, head_payload

bp = Blueprint('commit', __name__, url_prefix='/api/git')


@bp.route('/commit', methods=['POST'])
def api_commit():
    """Stage the posted tree and commit it."""
    r = get_repo()
    data = get_payload()

    message = data.get('message')
    tree = data.get('tree', data.get('blocks'))

    try:
        if not isinstance(message, str) or not message.strip():
            raise ValueError('Commit message required')
        if tree is not None:
            if not isinstance(tree, list):
                raise ValueError('tree must be a list of items')
            if not tree:
                raise ValueError('Nothing to commit')
            r.add(tree)

        commit = r.commit(message)
        return jsonify({'commit': commit.to_dict()})
    except Exception as e:
        return error_response(e)


@bp.route('/commits')
def api_commits():
    """Get the history visible from HEAD."""
    r = get_repo()
    return jsonify({'commits': commits_payload(r)})


@bp.route('/commit/<commit_id>')
def api_commit_get(commit_id):
    """Get a single commit."""
    r = get_repo()
    commit = r.get_commit(commit_id)
    if commit is None:
        return jsonify({'error': f"Commit '{commit_id}' not found"}), 404
    return jsonify({'commit': commit.to_dict()})


@bp.route('/commit/<commit_id>/checkout', methods=['POST'])
def api_commit_checkout(commit_id):
    """Check out a commit (detached HEAD)."""
    r = get_repo()
    try:
        head = r.checkout_commit(commit_id)
        return jsonify({'head': head.to_dict()})
    except Exception as e:
        return error_response(e)


@bp.route('/commit/<commit_id>/reset', methods=['POST'])
@bp.route('/commit/<commit_id>/rollback', methods=['POST'])
def api_commit_reset(commit_id):
    """Reset the current branch to a commit."""
    r = get_repo()
    try:
        head = r.reset_to_commit(commit_id)
        return jsonify({'head': head.to_dict(), 'commits': commits_payload(r)})
    except Exception as e:
        return error_response(e)


@bp.route('/commit/<commit_id>/revert', methods=['POST'])
def api_commit_revert(commit_id):
    """Re-apply a commit's snapshot as a new commit."""
    r = get_repo()
    message = get_payload().get('message') or None
    try:
        commit = r.revert_commit(commit_id, message)
        return jsonify({'commit': commit.to_dict(), 'commits': commits_payload(r)})
    except Exception as e:
        return error_response(e)


@bp.route('/commit/<commit_id>', methods=['DELETE'])
def api_commit_delete(commit_id):
    """Delete a single commit."""
    r = get_repo()
    try:
        commits = r.delete_commit(commit_id)
        return jsonify({'commits': [c.to_dict() for c in commits], 'head': head_payload(r)})
    except Exception as e:
        return error_response(e)
