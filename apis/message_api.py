from flask import Blueprint, jsonify, request
import logging

from apis.auth_api import require_user, error_response, json_body, text_field

logger = logging.getLogger(__name__)

message_bp = Blueprint('messages', __name__, url_prefix='/api/messages')

RECIPIENT_OPTIONS = {
    'student': [
        {'value': 'supervisor', 'label': 'My Supervisor'},
        {'value': 'admin', 'label': 'Administration'},
        {'value': 'support', 'label': 'Technical Support'},
    ],
    'staff': [
        {'value': 'student', 'label': 'Student'},
        {'value': 'colleague', 'label': 'Colleague'},
        {'value': 'admin', 'label': 'Administration'},
    ],
    'admin': [
        {'value': 'all-staff', 'label': 'All Staff'},
        {'value': 'all-students', 'label': 'All Students'},
        {'value': 'individual', 'label': 'Individual User'},
    ],
}


def get_recipient_options(role):
    # 未知角色按管理员处理
    return RECIPIENT_OPTIONS.get(role, RECIPIENT_OPTIONS['admin'])


@message_bp.route('/recipients', methods=['GET'])
def recipients():
    user, error = require_user()
    if error:
        return error
    return jsonify({
        'status': 'success',
        'recipients': get_recipient_options(user.get('role'))
    })


@message_bp.route('', methods=['POST'])
def send_message():
    """发送消息（仅校验并确认，不保存）"""
    user, error = require_user()
    if error:
        return error

    data = json_body()
    recipient = text_field(data, 'recipient')
    subject = text_field(data, 'subject')
    message = text_field(data, 'message')

    if not recipient or not subject or not message:
        return error_response('Please fill in all fields.', 400)
    if recipient not in [option['value'] for option in get_recipient_options(user.get('role'))]:
        return error_response(f'Invalid recipient: {recipient}', 400)

    logger.info(f"消息: {user.get('email')} -> {recipient}: {subject}")
    return jsonify({
        'status': 'success',
        'message': 'Message Sent',
        'notification': {
            'title': 'Message Sent',
            'description': f'Your message has been sent to {recipient}.',
            'variant': 'default'
        }
    }), 200
