from flask import Blueprint, jsonify, request
import logging

from apis.auth_api import get_storage, require_user, error_response, json_body, text_field
from db.citation_operations import CitationOperations
from db.material_operations import MaterialOperations
from db.project_operations import ProjectOperations
from db.supervision_operations import SupervisionOperations
from db.user_operations import UserOperations, redact_user
from schemas import SUPERVISION_STATUSES, USER_ROLES

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')


@admin_bp.route('/stats', methods=['GET'])
def system_stats():
    """系统统计"""
    user, error = require_user('admin')
    if error:
        return error

    storage = get_storage()
    user_ops = UserOperations(storage)
    material_ops = MaterialOperations(storage)
    project_ops = ProjectOperations(storage)
    citation_ops = CitationOperations(storage)

    users = user_ops.get_users()
    stats = {
        'total_users': len(users),
        'users_by_role': {role: sum(1 for u in users if u.get('role') == role) for role in USER_ROLES},
        'materials': len(material_ops.get_materials()),
        'total_downloads': material_ops.total_downloads(),
        'projects': len(project_ops.get_projects()),
        'projects_by_status': project_ops.count_by_status(),
        'citations': len(citation_ops.get_citations()),
        'pending_citations': len(citation_ops.get_citations_by_validation(False)),
    }
    return jsonify({
        'status': 'success',
        'stats': stats
    })


@admin_bp.route('/users', methods=['GET'])
def list_users():
    user, error = require_user('admin')
    if error:
        return error

    user_ops = UserOperations(get_storage())
    role = request.args.get('role')
    users = user_ops.get_users_by_role(role) if role else user_ops.get_users()
    return jsonify({
        'status': 'success',
        'count': len(users),
        'users': [redact_user(u) for u in users]
    })


@admin_bp.route('/users/<user_id>', methods=['DELETE'])
def delete_user(user_id):
    user, error = require_user('admin')
    if error:
        return error
    if user_id == user['id']:
        return error_response('You cannot delete your own account.', 400)

    if not UserOperations(get_storage()).delete_user(user_id):
        return error_response('User not found', 404)
    return jsonify({
        'status': 'success',
        'message': 'User deleted'
    })


@admin_bp.route('/supervisions', methods=['GET'])
def list_supervisions():
    user, error = require_user('admin')
    if error:
        return error
    supervisions = SupervisionOperations(get_storage()).get_supervisions()
    return jsonify({
        'status': 'success',
        'count': len(supervisions),
        'supervisions': supervisions
    })


@admin_bp.route('/supervisions', methods=['POST'])
def assign_supervisor():
    """为学生分配导师"""
    user, error = require_user('admin')
    if error:
        return error

    data = json_body()
    supervisor_id = text_field(data, 'supervisor_id')
    student_id = text_field(data, 'student_id')
    if not supervisor_id or not student_id:
        return error_response('supervisor_id and student_id are required', 400)

    user_ops = UserOperations(get_storage())
    supervisor = user_ops.get_user_by_id(supervisor_id)
    student = user_ops.get_user_by_id(student_id)
    if not supervisor or supervisor.get('role') != 'staff':
        return error_response('Supervisor must be an existing staff account', 400)
    if not student or student.get('role') != 'student':
        return error_response('Student must be an existing student account', 400)

    supervision = SupervisionOperations(get_storage()).add_supervision(supervisor_id, student_id)
    return jsonify({
        'status': 'success',
        'supervision': supervision
    }), 201


@admin_bp.route('/supervisions/<supervision_id>', methods=['PATCH'])
def update_supervision(supervision_id):
    user, error = require_user('admin')
    if error:
        return error

    data = json_body()
    status = text_field(data, 'status')
    if status not in SUPERVISION_STATUSES:
        return error_response(f'Invalid supervision status: {status}', 400)

    supervision = SupervisionOperations(get_storage()).update_supervision_status(supervision_id, status)
    if not supervision:
        return error_response('Supervision not found', 404)
    return jsonify({
        'status': 'success',
        'supervision': supervision
    })
