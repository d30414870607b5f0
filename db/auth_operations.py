"""
登录会话

两种状态：匿名 / 已登录(用户)。当前用户（去掉密码）保存在 currentUser 键下，
启动时从存储恢复。每次状态变化都会产生一条提示（Notification）。
"""
from typing import Callable, Dict, Optional, Any
import json
import logging

from config import AUTH_CONFIG
from db.record_store import CURRENT_USER_KEY
from db.user_operations import UserOperations, redact_user
from schemas import Notification, USER_ROLES

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials or role mismatch"
DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"

# 注册时允许写入用户记录的附加字段
EXTRA_USER_FIELDS = {
    'department': 'department',
    'studentId': 'student_id',
    'staffId': 'staff_id',
}


def validate_registration(email: str, password: str, confirm_password: str,
                          name: str, role: str) -> Optional[str]:
    """注册表单校验

    Returns:
        str: 错误信息，校验通过返回None
    """
    if not email or not password or not name or not role:
        return "Please fill in all required fields."
    if role not in USER_ROLES:
        return f"Invalid role: {role}"
    if password != confirm_password:
        return "Passwords do not match!"
    min_length = AUTH_CONFIG['min_password_length']
    if len(password) < min_length:
        return f"Password must be at least {min_length} characters long!"
    return None


class AuthSession:
    """认证门面"""

    def __init__(self, storage, notifier: Callable[[Notification], None] = None):
        self.storage = storage
        self.user_ops = UserOperations(storage)
        self.notifier = notifier
        self.current_user: Optional[Dict[str, Any]] = None
        self.last_notification: Optional[Notification] = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def _notify(self, title: str, description: str, variant: str = 'default'):
        notification = Notification(title=title, description=description, variant=variant)
        self.last_notification = notification
        if variant == 'destructive':
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")
        if self.notifier:
            self.notifier(notification)
        return notification

    def _authenticate(self, user: Dict[str, Any]) -> Dict[str, Any]:
        redacted = redact_user(user)
        self.storage.set_item(CURRENT_USER_KEY, json.dumps(redacted, ensure_ascii=False))
        self.current_user = redacted
        return redacted

    def hydrate(self) -> Optional[Dict[str, Any]]:
        """从存储恢复登录状态，数据损坏时清除并保持匿名"""
        raw = self.storage.get_item(CURRENT_USER_KEY)
        if raw is None:
            self.current_user = None
            return None
        try:
            user = json.loads(raw)
            if not isinstance(user, dict):
                raise ValueError("currentUser is not an object")
        except ValueError as e:
            logger.warning(f"会话数据损坏，已清除: {e}")
            self.storage.remove_item(CURRENT_USER_KEY)
            self.current_user = None
            return None
        self.current_user = user
        return user

    def login(self, email: str, password: str, role: str) -> Optional[Dict[str, Any]]:
        """登录

        Args:
            email: 邮箱
            password: 密码
            role: 角色

        Returns:
            Dict: 去掉密码的用户记录，失败返回None
        """
        try:
            user = self.user_ops.find_by_credentials(email, password, role)
            if not user:
                # 不区分是密码错误还是角色不符
                self._notify("Login Failed", INVALID_CREDENTIALS_MESSAGE, 'destructive')
                return None

            redacted = self._authenticate(user)
            self._notify("Login Successful", f"Welcome back, {user.get('name')}!")
            return redacted
        except Exception as e:
            logger.error(f"登录失败: {e}")
            self._notify("Login Error", "An error occurred during login", 'destructive')
            return None

    def register(self, email: str, password: str, name: str, role: str,
                 additional_data: Dict[str, Any] = None) -> Optional[Dict[str, Any]]:
        """注册并自动登录

        Args:
            email: 邮箱（区分大小写，不可重复）
            password: 密码
            name: 姓名
            role: 角色
            additional_data: department / studentId / staffId

        Returns:
            Dict: 去掉密码的新用户记录，失败返回None
        """
        try:
            extra = {}
            for key, arg in EXTRA_USER_FIELDS.items():
                value = (additional_data or {}).get(key)
                if value:
                    extra[arg] = value

            with self.storage.lock:
                if self.user_ops.get_user_by_email(email):
                    self._notify("Registration Failed", DUPLICATE_EMAIL_MESSAGE, 'destructive')
                    return None
                user = self.user_ops.add_user(email, password, name, role, **extra)

            redacted = self._authenticate(user)
            self._notify("Registration Successful", f"Welcome to UniJos Repository, {name}!")
            return redacted
        except Exception as e:
            logger.error(f"注册失败: {e}")
            self._notify("Registration Error", "An error occurred during registration", 'destructive')
            return None

    def logout(self):
        self.storage.remove_item(CURRENT_USER_KEY)
        self.current_user = None
        self._notify("Logged Out", "You have been successfully logged out")
