from flask import Blueprint, jsonify, request
import logging

from apis.auth_api import get_storage, require_user, error_response, json_body, text_field
from citation_utils.bib2text import materials_to_bibtex, materials_to_text, CITATION_STYLES
from db.citation_operations import CitationOperations
from db.material_operations import MaterialOperations
from db.project_operations import ProjectOperations
from db.supervision_operations import SupervisionOperations
from schemas import PROJECT_STATUSES

logger = logging.getLogger(__name__)

project_bp = Blueprint('projects', __name__, url_prefix='/api/projects')


def _can_view(user, project):
    if user['role'] == 'admin' or project.get('studentId') == user['id']:
        return True
    if user['role'] == 'staff':
        if project.get('supervisorId') == user['id']:
            return True
        students = SupervisionOperations(get_storage()).get_students_by_supervisor(user['id'])
        return project.get('studentId') in students
    return False


def _load_visible_project(project_id):
    """
    读取当前用户可见的项目

    Returns:
        tuple: (用户, 项目, 错误响应)
    """
    user, error = require_user()
    if error:
        return None, None, error
    project = ProjectOperations(get_storage()).get_project_by_id(project_id)
    if not project:
        return user, None, error_response('Project not found', 404)
    if not _can_view(user, project):
        return user, None, error_response('You do not have access to this project.', 403)
    return user, project, None


@project_bp.route('/mine', methods=['GET'])
def my_projects():
    """当前学生的全部项目"""
    user, error = require_user('student')
    if error:
        return error
    projects = ProjectOperations(get_storage()).get_projects_by_student(user['id'])
    return jsonify({
        'status': 'success',
        'count': len(projects),
        'projects': projects
    })


@project_bp.route('', methods=['POST'])
def upload_project():
    """学生上传项目，初始状态为draft"""
    user, error = require_user('student')
    if error:
        return error

    data = json_body()
    title = text_field(data, 'title')
    description = text_field(data, 'description')
    if not title or not description:
        return error_response('Please fill in all required fields.', 400)

    # 有指导关系时默认挂到当前导师名下
    supervisor_id = text_field(data, 'supervisor_id')
    if not supervisor_id:
        supervisors = SupervisionOperations(get_storage()).get_supervisors_by_student(user['id'])
        supervisor_id = supervisors[0] if supervisors else None

    project = ProjectOperations(get_storage()).add_project(
        title=title,
        description=description,
        student_id=user['id'],
        supervisor_id=supervisor_id,
    )
    return jsonify({
        'status': 'success',
        'message': 'Project uploaded successfully!',
        'project': project
    }), 201


@project_bp.route('/<project_id>', methods=['GET'])
def get_project(project_id):
    user, project, error = _load_visible_project(project_id)
    if error:
        return error
    return jsonify({
        'status': 'success',
        'project': project
    })


@project_bp.route('/<project_id>/status', methods=['PATCH'])
def update_status(project_id):
    """
    修改项目状态

    学生只能把自己的项目提交（submitted）或退回草稿，教职工/管理员可设置任意状态
    """
    user, project, error = _load_visible_project(project_id)
    if error:
        return error

    data = json_body()
    status = text_field(data, 'status')
    if status not in PROJECT_STATUSES:
        return error_response(f'Invalid project status: {status}', 400)
    if user['role'] == 'student' and status not in ('draft', 'submitted'):
        return error_response('Students can only submit or withdraw their projects.', 403)

    updated = ProjectOperations(get_storage()).update_project_status(project_id, status)
    if not updated:
        return error_response('Project not found', 404)
    return jsonify({
        'status': 'success',
        'project': updated
    })


@project_bp.route('/<project_id>', methods=['DELETE'])
def delete_project(project_id):
    """删除项目（项目所属学生或管理员），引用记录保留"""
    user, project, error = _load_visible_project(project_id)
    if error:
        return error
    if user['role'] != 'admin' and project.get('studentId') != user['id']:
        return error_response('You do not have access to this project.', 403)

    ProjectOperations(get_storage()).delete_project(project_id)
    return jsonify({
        'status': 'success',
        'message': 'Project deleted'
    })


@project_bp.route('/<project_id>/citations', methods=['GET'])
def list_citations(project_id):
    user, project, error = _load_visible_project(project_id)
    if error:
        return error
    citations = CitationOperations(get_storage()).get_citations_by_project(project_id)
    return jsonify({
        'status': 'success',
        'count': len(citations),
        'citations': citations
    })


@project_bp.route('/<project_id>/citations', methods=['POST'])
def add_citation(project_id):
    """学生为自己的项目添加引用"""
    user, project, error = _load_visible_project(project_id)
    if error:
        return error
    if project.get('studentId') != user['id']:
        return error_response('Only the project owner can add citations.', 403)

    data = json_body()
    material_id = text_field(data, 'material_id')
    if not material_id:
        return error_response('material_id is required', 400)
    if not MaterialOperations(get_storage()).get_material_by_id(material_id):
        return error_response('Material not found', 404)

    citation = CitationOperations(get_storage()).add_citation(material_id, project_id, user['id'])
    return jsonify({
        'status': 'success',
        'citation': citation
    }), 201


@project_bp.route('/<project_id>/citations/export', methods=['GET'])
def export_citations(project_id):
    """导出项目的参考文献，style: bibtex | apa | mla | gb7714"""
    user, project, error = _load_visible_project(project_id)
    if error:
        return error

    style = request.args.get('style', 'bibtex').lower()
    if style != 'bibtex' and style not in CITATION_STYLES:
        return error_response(f'Unsupported citation style: {style}', 400)

    material_ops = MaterialOperations(get_storage())
    materials = []
    for citation in CitationOperations(get_storage()).get_citations_by_project(project_id):
        material = material_ops.get_material_by_id(citation.get('materialId'))
        # 引用的资料可能已被删除
        if material:
            materials.append(material)

    if style == 'bibtex':
        content = materials_to_bibtex(materials)
    else:
        content = materials_to_text(materials, style)

    return jsonify({
        'status': 'success',
        'style': style,
        'count': len(materials),
        'content': content
    })
