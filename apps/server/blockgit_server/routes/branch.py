"""Branch route handlers."""
from __future__ import annotations

from flask import Blueprint, jsonify

from ..utils import (
    branches_payload,
    commits_payload,
    current_branch_payload,
    error_response,
    get_payload,
    get_repo,
    head_payload,
)

bp = Blueprint('branch', __name__, url_prefix='/api/git')


@bp.route('/branches')
def api_branches():
    """Get branch list."""
    r = get_repo()
    return jsonify({'branches': branches_payload(r), 'currentBranch': current_branch_payload(r)})


@bp.route('/head')
def api_head():
    """Get the checked out commit."""
    r = get_repo()
    state = r.head_state()
    return jsonify({
        'head': head_payload(r),
        'headId': state.commit_id,
        'detached': state.detached,
        'currentBranch': current_branch_payload(r),
    })


@bp.route('/branch', methods=['POST'])
def api_branch_create():
    """Create a new branch, optionally switching to it."""
    r = get_repo()
    data = get_payload()

    name = data.get('name')
    if not name:
        return jsonify({'error': 'Branch name required'}), 400

    try:
        if data.get('checkout'):
            branch = r.create_and_checkout_branch(name, data.get('fromCommitId'))
        else:
            branch = r.create_branch(name, data.get('fromCommitId'))
        return jsonify({
            'branch': branch.to_dict(),
            'branches': branches_payload(r),
            'currentBranch': current_branch_payload(r),
        })
    except Exception as e:
        return error_response(e)


@bp.route('/branch/clone', methods=['POST'])
def api_branch_clone():
    """Clone the current branch."""
    r = get_repo()
    data = get_payload()

    name = data.get('name')
    if not name:
        return jsonify({'error': 'Branch name required'}), 400

    try:
        branch = r.clone_branch(name, full_history=bool(data.get('fullHistory')))
        return jsonify({
            'branch': branch.to_dict(),
            'branches': branches_payload(r),
            'currentBranch': current_branch_payload(r),
        })
    except Exception as e:
        return error_response(e)


@bp.route('/branch/<branch_id>', methods=['DELETE'])
def api_branch_delete(branch_id):
    """Delete a branch."""
    r = get_repo()
    try:
        r.delete_branch(branch_id)
        return jsonify({'branches': branches_payload(r), 'currentBranch': current_branch_payload(r)})
    except Exception as e:
        return error_response(e)


@bp.route('/branch/<branch_id>/checkout', methods=['POST'])
def api_branch_checkout(branch_id):
    """Checkout a branch."""
    r = get_repo()
    try:
        r.checkout_branch(branch_id)
        return jsonify({
            'head': head_payload(r),
            'commits': commits_payload(r),
            'currentBranch': current_branch_payload(r),
        })
    except Exception as e:
        return error_response(e)
