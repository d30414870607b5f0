from typing import Any, Callable, Dict, List, Optional
import json
import logging

from db.storage import KeyValueStorage
from schemas import utc_now_iso

logger = logging.getLogger(__name__)

USERS = 'users'
PROJECTS = 'projects'
MATERIALS = 'materials'
CITATIONS = 'citations'
SUPERVISIONS = 'supervisions'
PARTITIONS = (USERS, PROJECTS, MATERIALS, CITATIONS, SUPERVISIONS)

# 当前登录用户（去掉密码），不属于任何分区
CURRENT_USER_KEY = 'currentUser'


class RecordStore:
    """单个分区的记录集合

    整个分区以JSON数组保存在一个键下，每次操作都是读全部、内存中修改、写全部。
    """

    def __init__(self, storage: KeyValueStorage, partition: str, touch_updated_at: bool = False):
        if partition not in PARTITIONS:
            raise ValueError(f"未知的分区: {partition}")
        self.storage = storage
        self.partition = partition
        self.touch_updated_at = touch_updated_at

    def get_all(self) -> List[Dict[str, Any]]:
        """读取分区内全部记录

        Returns:
            List[Dict]: 记录列表；键不存在、JSON损坏或不是数组时返回空列表，
                非对象元素被丢弃
        """
        raw = self.storage.get_item(self.partition)
        if raw is None:
            return []
        try:
            records = json.loads(raw)
        except ValueError as e:
            logger.warning(f"分区 {self.partition} 数据损坏，按空集合处理: {e}")
            return []
        if not isinstance(records, list):
            logger.warning(f"分区 {self.partition} 不是JSON数组，按空集合处理")
            return []
        valid = [record for record in records if isinstance(record, dict)]
        if len(valid) != len(records):
            logger.warning(f"分区 {self.partition} 含有 {len(records) - len(valid)} 条非对象记录，已忽略")
        return valid

    def _write_all(self, records: List[Dict[str, Any]]) -> None:
        self.storage.set_item(self.partition, json.dumps(records, ensure_ascii=False))

    def find_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        for record in self.get_all():
            if record.get('id') == record_id:
                return record
        return None

    def filter(self, predicate: Callable[[Dict[str, Any]], bool]) -> List[Dict[str, Any]]:
        return [record for record in self.get_all() if predicate(record)]

    def save(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """按id替换或追加记录

        Args:
            record: 记录

        Returns:
            Dict: 实际写入的记录（替换时可能带有新的updatedAt）
        """
        with self.storage.lock:
            records = self.get_all()
            for index, existing in enumerate(records):
                if existing.get('id') == record.get('id'):
                    saved = dict(record)
                    if self.touch_updated_at:
                        saved['updatedAt'] = utc_now_iso()
                    records[index] = saved
                    break
            else:
                saved = dict(record)
                records.append(saved)
            self._write_all(records)
        return saved

    def update_by_id(self, record_id: str, mutate: Callable[[Dict[str, Any]], None]) -> Optional[Dict[str, Any]]:
        """读全部、就地修改一条记录、写全部

        Returns:
            Dict: 修改后的记录，id不存在时返回None且不写入
        """
        with self.storage.lock:
            records = self.get_all()
            for record in records:
                if record.get('id') == record_id:
                    mutate(record)
                    if self.touch_updated_at:
                        record['updatedAt'] = utc_now_iso()
                    self._write_all(records)
                    return record
        return None

    def delete_by_id(self, record_id: str) -> bool:
        """删除记录（不级联）

        Returns:
            bool: 是否删除了记录
        """
        with self.storage.lock:
            records = self.get_all()
            remaining = [record for record in records if record.get('id') != record_id]
            self._write_all(remaining)
        return len(remaining) != len(records)

    def replace_all(self, records: List[Dict[str, Any]]) -> None:
        with self.storage.lock:
            self._write_all(list(records))

    def count(self) -> int:
        return len(self.get_all())
