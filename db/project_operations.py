from typing import List, Dict, Optional, Any
import logging
import uuid

from db.record_store import RecordStore, PROJECTS
from db.supervision_operations import SupervisionOperations
from schemas import Project, PROJECT_STATUSES, utc_now_iso

logger = logging.getLogger(__name__)


class ProjectOperations:
    """项目记录操作类"""

    def __init__(self, storage):
        self.storage = storage
        # 替换已有项目时刷新updatedAt
        self.store = RecordStore(storage, PROJECTS, touch_updated_at=True)

    def get_projects(self) -> List[Dict]:
        return self.store.get_all()

    def get_project_by_id(self, project_id: str) -> Optional[Dict]:
        return self.store.find_by_id(project_id)

    def get_projects_by_student(self, student_id: str) -> List[Dict]:
        return self.store.filter(lambda p: p.get('studentId') == student_id)

    def get_projects_by_supervisor(self, supervisor_id: str) -> List[Dict]:
        """按项目上登记的supervisorId过滤"""
        return self.store.filter(lambda p: p.get('supervisorId') == supervisor_id)

    def get_projects_for_supervised_students(self, supervisor_id: str) -> List[Dict]:
        """导师当前指导的学生的全部项目（通过指导关系关联）"""
        student_ids = set(SupervisionOperations(self.storage).get_students_by_supervisor(supervisor_id))
        return self.store.filter(lambda p: p.get('studentId') in student_ids)

    def save_project(self, project: Dict[str, Any]) -> Dict:
        """保存项目：已存在则替换并刷新updatedAt，否则追加"""
        return self.store.save(project)

    def add_project(self, title: str, description: str, student_id: str,
                    status: str = 'draft', supervisor_id: str = None) -> Dict:
        """新建项目

        Args:
            title: 标题
            description: 描述
            student_id: 所属学生id
            status: 初始状态
            supervisor_id: 导师id（可选）

        Returns:
            Dict: 新项目记录
        """
        if status not in PROJECT_STATUSES:
            raise ValueError(f"无效的项目状态: {status}")
        now = utc_now_iso()
        project = Project(
            id=str(uuid.uuid4()),
            title=title,
            description=description,
            student_id=student_id,
            supervisor_id=supervisor_id,
            status=status,
            created_at=now,
            updated_at=now,
            submitted_at=now if status == 'submitted' else None,
        )
        record = self.store.save(project.to_record())
        logger.info(f"新增项目: {record['id']} ({title})")
        return record

    def update_project_status(self, project_id: str, status: str) -> Optional[Dict]:
        """修改项目状态，不限制状态流转顺序

        Returns:
            Dict: 修改后的项目，不存在时返回None
        """
        if status not in PROJECT_STATUSES:
            raise ValueError(f"无效的项目状态: {status}")

        def apply(record):
            record['status'] = status
            if status == 'submitted':
                record['submittedAt'] = utc_now_iso()

        updated = self.store.update_by_id(project_id, apply)
        if updated:
            logger.info(f"项目状态更新: {project_id} -> {status}")
        return updated

    def delete_project(self, project_id: str) -> bool:
        """删除项目，相关引用不会一并删除"""
        deleted = self.store.delete_by_id(project_id)
        if deleted:
            logger.info(f"删除项目: {project_id}")
        return deleted

    def count_by_status(self) -> Dict[str, int]:
        """按状态统计项目数，缺失或非字符串的状态计入unknown"""
        counts = {status: 0 for status in PROJECT_STATUSES}
        for project in self.store.get_all():
            status = project.get('status')
            if not isinstance(status, str) or not status:
                status = 'unknown'
            counts[status] = counts.get(status, 0) + 1
        return counts
