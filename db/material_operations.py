from typing import List, Dict, Optional, Any
import logging
import uuid

from db.record_store import RecordStore, MATERIALS
from schemas import Material, MATERIAL_TYPES

logger = logging.getLogger(__name__)


def _matches(material: Dict[str, Any], search_term: str) -> bool:
    if search_term in (material.get('title') or '').lower():
        return True
    if search_term in (material.get('author') or '').lower():
        return True
    if any(isinstance(keyword, str) and search_term in keyword.lower() for keyword in material.get('keywords') or []):
        return True
    return search_term in (material.get('description') or '').lower()


class MaterialOperations:
    """学术资料操作类"""

    def __init__(self, storage):
        self.storage = storage
        self.store = RecordStore(storage, MATERIALS)

    def get_materials(self) -> List[Dict]:
        return self.store.get_all()

    def get_material_by_id(self, material_id: str) -> Optional[Dict]:
        return self.store.find_by_id(material_id)

    def save_material(self, material: Dict[str, Any]) -> Dict:
        return self.store.save(material)

    def add_material(self, title: str, author: str, material_type: str, year: str,
                     description: str = '', keywords: List[str] = None,
                     uploaded_by: str = 'admin', file_url: str = None) -> Dict:
        """新增资料

        Returns:
            Dict: 新资料记录，下载次数从0开始
        """
        if material_type not in MATERIAL_TYPES:
            raise ValueError(f"无效的资料类型: {material_type}")
        material = Material(
            id=str(uuid.uuid4()),
            title=title,
            author=author,
            type=material_type,
            year=str(year),
            description=description,
            keywords=list(keywords or []),
            file_url=file_url,
            uploaded_by=uploaded_by,
        )
        record = self.store.save(material.to_record())
        logger.info(f"新增资料: {record['id']} ({title})")
        return record

    def search_materials(self, query: str = '', material_type: str = None, year: str = None) -> List[Dict]:
        """搜索资料

        标题、作者、描述或任一关键词包含查询串即命中（不区分大小写），
        查询为空时返回全部；再按类型、年份精确过滤。

        Args:
            query: 查询串
            material_type: 资料类型，None或"all"表示不过滤
            year: 出版年份，None或"all"表示不过滤

        Returns:
            List[Dict]: 命中的资料
        """
        materials = self.store.get_all()
        if query and query.strip():
            search_term = query.lower()
            materials = [m for m in materials if _matches(m, search_term)]

        if material_type and material_type != 'all':
            materials = [m for m in materials if (m.get('type') or '').lower() == material_type.lower()]

        if year and year != 'all':
            materials = [m for m in materials if str(m.get('year')) == str(year)]

        return materials

    def increment_download(self, material_id: str) -> Optional[Dict]:
        """下载次数加一

        Returns:
            Dict: 更新后的资料，不存在时返回None
        """
        def apply(record):
            record['downloads'] = record.get('downloads', 0) + 1

        return self.store.update_by_id(material_id, apply)

    def get_popular_materials(self, limit: int = 5) -> List[Dict]:
        materials = sorted(self.store.get_all(), key=lambda m: m.get('downloads', 0), reverse=True)
        return materials[:limit]

    def total_downloads(self) -> int:
        return sum(m.get('downloads', 0) for m in self.store.get_all())

    def delete_material(self, material_id: str) -> bool:
        deleted = self.store.delete_by_id(material_id)
        if deleted:
            logger.info(f"删除资料: {material_id}")
        return deleted
