# 配置文件
import os
from dotenv import load_dotenv

env_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), '.env')
load_dotenv(env_path)

# 存储配置
# backend: memory | file | supabase
STORAGE_CONFIG = {
    'backend': os.getenv('STORAGE_BACKEND', 'file'),
    'data_dir': os.getenv('STORAGE_DATA_DIR', 'data'),
    'origin': os.getenv('STORAGE_ORIGIN', 'localhost'),
    'table': os.getenv('STORAGE_TABLE', 'local_storage'),
}

SUPABASE_CONFIG = {
    'url': os.getenv('SUPABASE_PUBLIC_URL'),
    'key': os.getenv('ANON_KEY'),
    'service_key': os.getenv('SERVICE_ROLE_KEY'),
}

# Flask配置
FLASK_CONFIG = {
    'host': os.getenv('FLASK_HOST', '0.0.0.0'),
    'port': int(os.getenv('FLASK_PORT', 5000)),
    'debug': os.getenv('FLASK_DEBUG', 'True').lower() == 'true'
}

# 日志配置
LOGGING_CONFIG = {
    'level': os.getenv('LOG_LEVEL', 'INFO'),
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}

# 首次启动时写入演示数据
SEED_CONFIG = {
    'enabled': os.getenv('SEED_SAMPLE_DATA', 'True').lower() == 'true',
}

AUTH_CONFIG = {
    'min_password_length': int(os.getenv('MIN_PASSWORD_LENGTH', 6)),
}
