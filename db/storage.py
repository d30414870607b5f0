"""
同步的键值存储，按origin隔离

接口与浏览器的Web Storage一致（get_item / set_item / remove_item），
值一律为字符串。记录层在此之上按分区读写整个JSON数组。
"""
from typing import Dict, List, Optional
import json
import logging
import os
import tempfile
import threading

from config import STORAGE_CONFIG

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """键值存储基类"""

    def __init__(self, origin: str = 'localhost'):
        self.origin = origin
        # 记录层的"读-改-写"在此锁内完成
        self.lock = threading.RLock()

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> List[str]:
        raise NotImplementedError

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)

    def __len__(self):
        return len(self.keys())


class MemoryStorage(KeyValueStorage):
    """进程内存储，进程退出即丢失"""

    def __init__(self, origin: str = 'localhost', initial: Optional[Dict[str, str]] = None):
        super().__init__(origin)
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key):
        return self._items.get(key)

    def set_item(self, key, value):
        self._items[key] = str(value)

    def remove_item(self, key):
        self._items.pop(key, None)

    def keys(self):
        return list(self._items.keys())


class FileStorage(KeyValueStorage):
    """每个origin一个JSON文件：{key: value}

    每次读取都重新加载文件，多个进程共享同一文件时以最后一次写入为准。
    """

    def __init__(self, data_dir: str, origin: str = 'localhost'):
        super().__init__(origin)
        self.data_dir = data_dir
        self.file_path = os.path.join(data_dir, f"{origin}.json")

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.file_path):
            return {}
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"读取存储文件失败，按空存储处理: {self.file_path}, {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"存储文件格式错误，按空存储处理: {self.file_path}")
            return {}
        return data

    def _dump(self, items: Dict[str, str]) -> None:
        os.makedirs(self.data_dir, exist_ok=True)
        # 先写临时文件再替换，避免写到一半的文件
        fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, prefix=f".{self.origin}.", suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(items, f, ensure_ascii=False)
            os.replace(tmp_path, self.file_path)
        except OSError as e:
            logger.error(f"写入存储文件失败: {self.file_path}, {e}")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get_item(self, key):
        return self._load().get(key)

    def set_item(self, key, value):
        with self.lock:
            items = self._load()
            items[key] = str(value)
            self._dump(items)

    def remove_item(self, key):
        with self.lock:
            items = self._load()
            if key in items:
                del items[key]
                self._dump(items)

    def keys(self):
        return list(self._load().keys())

    def clear(self):
        with self.lock:
            self._dump({})


class SupabaseStorage(KeyValueStorage):
    """Supabase表存储，每行一个 (origin, key, value)"""

    def __init__(self, supabase, origin: str = 'localhost', table: str = 'local_storage'):
        super().__init__(origin)
        self.supabase = supabase
        self.table = table

    def get_item(self, key):
        try:
            result = self.supabase.table(self.table) \
                .select('value') \
                .eq('origin', self.origin) \
                .eq('key', key) \
                .limit(1) \
                .execute()
            return result.data[0]['value'] if result.data else None
        except Exception as e:
            logger.error(f"读取存储项失败: {key}, {e}")
            raise e

    def set_item(self, key, value):
        try:
            self.supabase.table(self.table).upsert(
                {'origin': self.origin, 'key': key, 'value': str(value)},
                on_conflict='origin,key'
            ).execute()
        except Exception as e:
            logger.error(f"写入存储项失败: {key}, {e}")
            raise e

    def remove_item(self, key):
        try:
            self.supabase.table(self.table) \
                .delete() \
                .eq('origin', self.origin) \
                .eq('key', key) \
                .execute()
        except Exception as e:
            logger.error(f"删除存储项失败: {key}, {e}")
            raise e

    def keys(self):
        try:
            result = self.supabase.table(self.table).select('key').eq('origin', self.origin).execute()
            return [row['key'] for row in result.data] if result.data else []
        except Exception as e:
            logger.error(f"获取存储键列表失败: {e}")
            raise e


def create_storage(config: Optional[Dict] = None) -> KeyValueStorage:
    """根据配置创建存储后端

    Args:
        config: 存储配置，默认使用 STORAGE_CONFIG

    Returns:
        KeyValueStorage: 存储实例
    """
    config = config or STORAGE_CONFIG
    backend = config.get('backend', 'file')
    origin = config.get('origin', 'localhost')

    if backend == 'memory':
        storage = MemoryStorage(origin)
    elif backend == 'file':
        storage = FileStorage(config.get('data_dir', 'data'), origin)
    elif backend == 'supabase':
        from db.supabase_client import SupabaseInitializer
        storage = SupabaseStorage(SupabaseInitializer().supabase, origin, config.get('table', 'local_storage'))
    else:
        raise ValueError(f"未知的存储后端: {backend}")

    logger.info(f"存储后端: {backend}, origin: {origin}")
    return storage
