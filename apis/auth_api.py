from flask import Blueprint, current_app, jsonify, request
import logging

from db.auth_operations import AuthSession, validate_registration
from schemas import USER_ROLES

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def get_storage():
    """当前应用使用的键值存储"""
    return current_app.extensions['record_storage']


def get_auth_session() -> AuthSession:
    return current_app.extensions['auth_session']


class InvalidFieldError(ValueError):
    """请求体字段类型错误，由应用统一返回400"""


def text_field(data, key, default='', strip=True):
    """
    读取请求体中的字符串字段

    Args:
        data: 请求体
        key: 字段名
        default: 字段缺失或为null时的默认值
        strip: 是否去掉首尾空白

    Returns:
        str: 字段值
    """
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise InvalidFieldError(f'Invalid value for field: {key}')
    return value.strip() if strip else value


def json_body():
    """请求体（JSON对象），缺失时为空dict"""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidFieldError('Request body must be a JSON object')
    return data


def error_response(message, status_code):
    return jsonify({
        'status': 'error',
        'message': message
    }), status_code


def require_user(*roles):
    """
    获取当前登录用户并检查角色

    Args:
        roles: 允许的角色，不传则任意已登录用户均可

    Returns:
        tuple: (用户, 错误响应)，二者必有一个为None
    """
    # 每次请求从存储恢复，其他进程的登录/注销在此生效
    user = get_auth_session().hydrate()
    if not user:
        return None, error_response('You must be logged in.', 401)
    if roles and user.get('role') not in roles:
        return None, error_response('You do not have access to this resource.', 403)
    return user, None


def notification_payload(session: AuthSession):
    notification = session.last_notification
    if not notification:
        return None
    return {
        'title': notification.title,
        'description': notification.description,
        'variant': notification.variant
    }


@auth_bp.route('/health', methods=['GET'])
def check_health():
    """认证模块健康检查"""
    return jsonify({
        'module': 'auth',
        'status': 'healthy',
        'message': 'Auth module is running'
    })


@auth_bp.route('/register', methods=['POST'])
def register():
    """用户注册，成功后自动登录"""
    data = json_body()
    email = text_field(data, 'email')
    password = text_field(data, 'password', strip=False)
    confirm_password = text_field(data, 'confirm_password', password, strip=False)
    name = text_field(data, 'name')
    role = text_field(data, 'role') or 'student'

    error = validate_registration(email, password, confirm_password, name, role)
    if error:
        return error_response(error, 400)

    additional_data = {'department': text_field(data, 'department')}
    if role == 'student':
        additional_data['studentId'] = text_field(data, 'student_id')
    if role == 'staff':
        additional_data['staffId'] = text_field(data, 'staff_id')

    session = get_auth_session()
    user = session.register(email, password, name, role, additional_data)
    if not user:
        notification = notification_payload(session)
        status_code = 409 if notification and notification['title'] == 'Registration Failed' else 500
        return jsonify({
            'status': 'error',
            'message': notification['description'] if notification else 'Registration failed',
            'notification': notification
        }), status_code

    return jsonify({
        'status': 'success',
        'message': 'Registration successful',
        'user': user,
        'notification': notification_payload(session)
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """用户登录，邮箱、密码、角色需同时匹配"""
    data = json_body()
    email = text_field(data, 'email')
    password = text_field(data, 'password', strip=False)
    role = text_field(data, 'role')

    if not email or not password or not role:
        return error_response('Email, password and role are required', 400)
    if role not in USER_ROLES:
        return error_response(f'Invalid role: {role}', 400)

    session = get_auth_session()
    user = session.login(email, password, role)
    if not user:
        notification = notification_payload(session)
        return jsonify({
            'status': 'error',
            'message': notification['description'] if notification else 'Login failed',
            'notification': notification
        }), 401

    return jsonify({
        'status': 'success',
        'message': 'Login successful',
        'user': user,
        'notification': notification_payload(session)
    }), 200


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """用户注销"""
    session = get_auth_session()
    session.logout()
    return jsonify({
        'status': 'success',
        'message': 'Logged out',
        'notification': notification_payload(session)
    }), 200


@auth_bp.route('/user', methods=['GET'])
def get_user():
    """获取当前用户信息"""
    user, error = require_user()
    if error:
        return error
    return jsonify({
        'status': 'success',
        'user': user
    }), 200
