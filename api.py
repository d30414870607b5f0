from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from datetime import datetime
import logging
from config import FLASK_CONFIG, LOGGING_CONFIG, SEED_CONFIG

from apis.auth_api import auth_bp, InvalidFieldError
from apis.material_api import material_bp
from apis.project_api import project_bp
from apis.staff_api import staff_bp
from apis.admin_api import admin_bp
from apis.message_api import message_bp
from db.auth_operations import AuthSession
from db.seed_data import initialize_sample_data
from db.storage import create_storage

logger = logging.getLogger(__name__)


def create_app(storage=None, seed=None):
    """
    创建Flask应用

    Args:
        storage: 键值存储，默认按 STORAGE_CONFIG 创建
        seed: 是否写入演示数据，默认按 SEED_CONFIG

    Returns:
        Flask: 应用实例
    """
    # 配置日志
    logging.basicConfig(level=LOGGING_CONFIG['level'], format=LOGGING_CONFIG['format'])

    app = Flask(__name__)
    CORS(app)

    storage = storage if storage is not None else create_storage()
    if seed is None:
        seed = SEED_CONFIG['enabled']
    if seed:
        initialize_sample_data(storage)

    # 启动时恢复上次的登录状态
    session = AuthSession(storage)
    session.hydrate()

    app.extensions['record_storage'] = storage
    app.extensions['auth_session'] = session

    app.register_blueprint(auth_bp)
    app.register_blueprint(material_bp)
    app.register_blueprint(project_bp)
    app.register_blueprint(staff_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(message_bp)

    @app.errorhandler(InvalidFieldError)
    def handle_invalid_field(e):
        return jsonify({
            'status': 'error',
            'message': str(e)
        }), 400

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        # 路由不存在、方法不允许等HTTP错误保持原样
        if isinstance(e, HTTPException):
            return e
        logger.error(f"请求处理失败: {e}")
        return jsonify({
            'status': 'error',
            'message': 'An unexpected error occurred'
        }), 500

    @app.route('/api/health', methods=['GET'])
    def health_check():
        """基础健康检查"""
        return jsonify({
            'status': 'healthy',
            'message': 'Welcome to the UniJos Project Repository API',
            'authenticated': session.hydrate() is not None,
            'timestamp': datetime.now().isoformat()
        })

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host=FLASK_CONFIG.get('host'), port=FLASK_CONFIG.get('port'), debug=FLASK_CONFIG.get('debug'))
