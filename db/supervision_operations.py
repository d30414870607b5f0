from typing import List, Dict, Optional
import logging
import uuid

from db.record_store import RecordStore, SUPERVISIONS
from schemas import Supervision, SUPERVISION_STATUSES

logger = logging.getLogger(__name__)


class SupervisionOperations:
    """导师-学生指导关系操作类"""

    def __init__(self, storage):
        self.storage = storage
        self.store = RecordStore(storage, SUPERVISIONS)

    def get_supervisions(self) -> List[Dict]:
        return self.store.get_all()

    def get_supervision_by_id(self, supervision_id: str) -> Optional[Dict]:
        return self.store.find_by_id(supervision_id)

    def save_supervision(self, supervision: Dict) -> Dict:
        return self.store.save(supervision)

    def add_supervision(self, supervisor_id: str, student_id: str, status: str = 'active') -> Dict:
        if status not in SUPERVISION_STATUSES:
            raise ValueError(f"无效的指导状态: {status}")
        supervision = Supervision(
            id=str(uuid.uuid4()),
            student_id=student_id,
            supervisor_id=supervisor_id,
            status=status,
        )
        record = self.store.save(supervision.to_record())
        logger.info(f"新增指导关系: {supervisor_id} -> {student_id}")
        return record

    def get_students_by_supervisor(self, supervisor_id: str) -> List[str]:
        """导师当前（active）指导的学生id"""
        return [
            s['studentId'] for s in self.store.get_all()
            if s.get('supervisorId') == supervisor_id and s.get('status') == 'active'
        ]

    def get_supervisors_by_student(self, student_id: str) -> List[str]:
        return [
            s['supervisorId'] for s in self.store.get_all()
            if s.get('studentId') == student_id and s.get('status') == 'active'
        ]

    def get_all_students_by_supervisor(self, supervisor_id: str) -> List[str]:
        """不区分状态的全部学生id"""
        return [s['studentId'] for s in self.store.get_all() if s.get('supervisorId') == supervisor_id]

    def update_supervision_status(self, supervision_id: str, status: str) -> Optional[Dict]:
        if status not in SUPERVISION_STATUSES:
            raise ValueError(f"无效的指导状态: {status}")

        def apply(record):
            record['status'] = status

        return self.store.update_by_id(supervision_id, apply)
