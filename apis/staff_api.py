from flask import Blueprint, jsonify, request
import logging

from apis.auth_api import get_storage, require_user, error_response, json_body, text_field
from db.citation_operations import CitationOperations
from db.project_operations import ProjectOperations
from db.supervision_operations import SupervisionOperations
from db.user_operations import UserOperations, redact_user

logger = logging.getLogger(__name__)

staff_bp = Blueprint('staff', __name__, url_prefix='/api/staff')


@staff_bp.route('/students', methods=['GET'])
def supervised_students():
    """当前导师指导中的学生"""
    user, error = require_user('staff')
    if error:
        return error

    user_ops = UserOperations(get_storage())
    students = []
    for student_id in SupervisionOperations(get_storage()).get_students_by_supervisor(user['id']):
        student = user_ops.get_user_by_id(student_id)
        # 学生账号可能已被删除
        students.append(redact_user(student) if student else {'id': student_id})
    return jsonify({
        'status': 'success',
        'count': len(students),
        'students': students
    })


@staff_bp.route('/projects', methods=['GET'])
def supervised_projects():
    """登记在本人名下或由本人指导的学生的项目"""
    user, error = require_user('staff')
    if error:
        return error

    project_ops = ProjectOperations(get_storage())
    projects = {p['id']: p for p in project_ops.get_projects_by_supervisor(user['id'])}
    for project in project_ops.get_projects_for_supervised_students(user['id']):
        projects.setdefault(project['id'], project)

    status = request.args.get('status')
    results = [p for p in projects.values() if not status or p.get('status') == status]
    return jsonify({
        'status': 'success',
        'count': len(results),
        'projects': results
    })


@staff_bp.route('/citations', methods=['GET'])
def supervised_citations():
    """导师名下学生的引用，pending=true 只返回待审核的"""
    user, error = require_user('staff')
    if error:
        return error

    citations = CitationOperations(get_storage()).get_citations_by_supervisor(user['id'])
    if request.args.get('pending', '').lower() == 'true':
        citations = [c for c in citations if not c.get('isValidated')]
    return jsonify({
        'status': 'success',
        'count': len(citations),
        'citations': citations
    })


@staff_bp.route('/citations/<citation_id>/validate', methods=['POST'])
def validate_citation(citation_id):
    """审核引用"""
    user, error = require_user('staff')
    if error:
        return error

    citation_ops = CitationOperations(get_storage())
    citation = citation_ops.get_citation_by_id(citation_id)
    if not citation:
        return error_response('Citation not found', 404)
    students = SupervisionOperations(get_storage()).get_all_students_by_supervisor(user['id'])
    if citation.get('studentId') not in students:
        return error_response('You do not supervise this student.', 403)

    data = json_body()
    approved = data.get('approved', True)
    if not isinstance(approved, bool):
        return error_response('approved must be a boolean', 400)

    updated = citation_ops.validate_citation(citation_id, user['id'], notes=text_field(data, 'notes', None), approved=approved)
    return jsonify({
        'status': 'success',
        'citation': updated
    })
