from flask import Blueprint, jsonify, request
import logging

from apis.auth_api import get_storage, require_user, error_response, json_body, text_field
from citation_utils.bib2text import materials_to_bibtex, materials_to_text, CITATION_STYLES
from db.material_operations import MaterialOperations
from schemas import MATERIAL_TYPES

logger = logging.getLogger(__name__)

material_bp = Blueprint('materials', __name__, url_prefix='/api/materials')


@material_bp.route('', methods=['GET'])
def search_materials():
    """
    搜索资料，无需登录

    查询参数：q（关键词）、type（资料类型）、year（出版年份）
    """
    query = request.args.get('q', '')
    material_type = request.args.get('type')
    year = request.args.get('year')

    material_ops = MaterialOperations(get_storage())
    results = material_ops.search_materials(query, material_type=material_type, year=year)
    return jsonify({
        'status': 'success',
        'count': len(results),
        'materials': results
    })


@material_bp.route('/popular', methods=['GET'])
def popular_materials():
    limit = request.args.get('limit', 5, type=int)
    materials = MaterialOperations(get_storage()).get_popular_materials(limit)
    return jsonify({
        'status': 'success',
        'materials': materials
    })


@material_bp.route('/<material_id>', methods=['GET'])
def get_material(material_id):
    material = MaterialOperations(get_storage()).get_material_by_id(material_id)
    if not material:
        return error_response('Material not found', 404)
    return jsonify({
        'status': 'success',
        'material': material
    })


@material_bp.route('/<material_id>/download', methods=['POST'])
def download_material(material_id):
    """下载资料，下载次数加一"""
    material = MaterialOperations(get_storage()).increment_download(material_id)
    if not material:
        return error_response('Material not found', 404)
    return jsonify({
        'status': 'success',
        'material': material
    })


@material_bp.route('/<material_id>/citation', methods=['GET'])
def cite_material(material_id):
    """生成单个资料的引用，style: bibtex | apa | mla | gb7714"""
    material = MaterialOperations(get_storage()).get_material_by_id(material_id)
    if not material:
        return error_response('Material not found', 404)

    style = request.args.get('style', 'apa').lower()
    if style == 'bibtex':
        citation = materials_to_bibtex([material])
    elif style in CITATION_STYLES:
        citation = materials_to_text([material], style)
    else:
        return error_response(f'Unsupported citation style: {style}', 400)

    return jsonify({
        'status': 'success',
        'style': style,
        'citation': citation
    })


@material_bp.route('', methods=['POST'])
def create_material():
    """新增资料（教职工/管理员）"""
    user, error = require_user('staff', 'admin')
    if error:
        return error

    data = json_body()
    title = text_field(data, 'title')
    author = text_field(data, 'author')
    material_type = text_field(data, 'type')
    # 年份可以是数字或字符串
    year = data.get('year')
    if isinstance(year, int) and not isinstance(year, bool):
        year = str(year)
    else:
        year = text_field(data, 'year')

    if not title or not author or not material_type or not year:
        return error_response('Please fill in all required fields.', 400)
    if material_type not in MATERIAL_TYPES:
        return error_response(f'Invalid material type: {material_type}', 400)

    keywords = data.get('keywords') or []
    if isinstance(keywords, str):
        keywords = [k.strip() for k in keywords.split(',') if k.strip()]
    elif not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
        return error_response('keywords must be a list of strings or a comma-separated string', 400)

    material = MaterialOperations(get_storage()).add_material(
        title=title,
        author=author,
        material_type=material_type,
        year=year,
        description=text_field(data, 'description'),
        keywords=keywords,
        uploaded_by=user.get('email'),
        file_url=text_field(data, 'file_url', None) or None,
    )
    return jsonify({
        'status': 'success',
        'message': 'Material added successfully',
        'material': material
    }), 201


@material_bp.route('/<material_id>', methods=['DELETE'])
def delete_material(material_id):
    """删除资料（管理员）"""
    user, error = require_user('admin')
    if error:
        return error

    if not MaterialOperations(get_storage()).delete_material(material_id):
        return error_response('Material not found', 404)
    return jsonify({
        'status': 'success',
        'message': 'Material deleted'
    })
