from typing import List, Dict, Optional, Any
import logging
import time

from db.record_store import RecordStore, USERS
from schemas import User

logger = logging.getLogger(__name__)


def redact_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """去掉密码字段"""
    return {k: v for k, v in user.items() if k != 'password'}


class UserOperations:
    """用户记录操作类"""

    def __init__(self, storage):
        self.storage = storage
        self.store = RecordStore(storage, USERS)

    def get_users(self) -> List[Dict]:
        return self.store.get_all()

    def get_user_by_id(self, user_id: str) -> Optional[Dict]:
        return self.store.find_by_id(user_id)

    def get_user_by_email(self, email: str) -> Optional[Dict]:
        """按邮箱精确匹配（区分大小写）"""
        for user in self.store.get_all():
            if user.get('email') == email:
                return user
        return None

    def get_users_by_role(self, role: str) -> List[Dict]:
        return self.store.filter(lambda u: u.get('role') == role)

    def find_by_credentials(self, email: str, password: str, role: str) -> Optional[Dict]:
        """邮箱、密码、角色三者同时匹配才返回用户"""
        for user in self.store.get_all():
            if user.get('email') == email and user.get('password') == password and user.get('role') == role:
                return user
        return None

    def _new_user_id(self, users: List[Dict]) -> str:
        # 以毫秒时间戳为id，同一毫秒内重复则顺延
        taken = {u.get('id') for u in users}
        candidate = int(time.time() * 1000)
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    def add_user(self, email: str, password: str, name: str, role: str,
                 department: str = None, student_id: str = None, staff_id: str = None) -> Dict:
        """追加用户记录，不做邮箱查重（查重由注册流程负责）

        Returns:
            Dict: 新用户记录（含密码）
        """
        with self.storage.lock:
            user = User(
                id=self._new_user_id(self.store.get_all()),
                email=email,
                password=password,
                name=name,
                role=role,
                department=department,
                student_id=student_id,
                staff_id=staff_id,
            )
            record = self.store.save(user.to_record())
        logger.info(f"新增用户: {email} ({role})")
        return record

    def delete_user(self, user_id: str) -> bool:
        deleted = self.store.delete_by_id(user_id)
        if deleted:
            logger.info(f"删除用户: {user_id}")
        return deleted
