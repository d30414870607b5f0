from typing import List, Dict, Optional, Any
import logging
import uuid

from db.record_store import RecordStore, CITATIONS
from db.supervision_operations import SupervisionOperations
from schemas import Citation

logger = logging.getLogger(__name__)


class CitationOperations:
    """项目引用操作类

    引用通过id关联项目和资料，不检查被引用的记录是否存在。
    """

    def __init__(self, storage):
        self.storage = storage
        self.store = RecordStore(storage, CITATIONS)

    def get_citations(self) -> List[Dict]:
        return self.store.get_all()

    def get_citation_by_id(self, citation_id: str) -> Optional[Dict]:
        return self.store.find_by_id(citation_id)

    def save_citation(self, citation: Dict[str, Any]) -> Dict:
        return self.store.save(citation)

    def add_citation(self, material_id: str, project_id: str, student_id: str) -> Dict:
        citation = Citation(
            id=str(uuid.uuid4()),
            material_id=material_id,
            project_id=project_id,
            student_id=student_id,
        )
        record = self.store.save(citation.to_record())
        logger.info(f"新增引用: 项目 {project_id} 引用资料 {material_id}")
        return record

    def get_citations_by_project(self, project_id: str) -> List[Dict]:
        return self.store.filter(lambda c: c.get('projectId') == project_id)

    def get_citations_by_student(self, student_id: str) -> List[Dict]:
        return self.store.filter(lambda c: c.get('studentId') == student_id)

    def get_citations_by_supervisor(self, supervisor_id: str) -> List[Dict]:
        """导师名下学生（任意指导状态）的全部引用"""
        student_ids = set(SupervisionOperations(self.storage).get_all_students_by_supervisor(supervisor_id))
        return self.store.filter(lambda c: c.get('studentId') in student_ids)

    def get_citations_by_validation(self, is_validated: bool) -> List[Dict]:
        return self.store.filter(lambda c: bool(c.get('isValidated')) == is_validated)

    def validate_citation(self, citation_id: str, validator_id: str, notes: str = None,
                          approved: bool = True) -> Optional[Dict]:
        """导师审核引用

        Args:
            citation_id: 引用id
            validator_id: 审核人id
            notes: 审核意见
            approved: 是否通过

        Returns:
            Dict: 更新后的引用，不存在时返回None
        """
        def apply(record):
            record['isValidated'] = approved
            record['validatedBy'] = validator_id
            if notes:
                record['validationNotes'] = notes

        updated = self.store.update_by_id(citation_id, apply)
        if updated:
            logger.info(f"引用审核: {citation_id} -> {'通过' if approved else '未通过'} ({validator_id})")
        return updated

    def delete_citation(self, citation_id: str) -> bool:
        return self.store.delete_by_id(citation_id)
