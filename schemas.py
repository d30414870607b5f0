"""
Record Schema Models for the UniJos Project Repository.

This module defines the records kept in the key-value storage. Each
partition (users, projects, materials, citations, supervisions) holds a JSON
array of these records. Stored field names are camelCase; the dataclasses use
snake_case attributes and convert with ``to_record()``.
"""

from typing import Optional, List, Dict, Any
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone


USER_ROLES = ('student', 'staff', 'admin')
PROJECT_STATUSES = ('draft', 'submitted', 'under-review', 'approved', 'rejected')
MATERIAL_TYPES = ('book', 'journal', 'article', 'thesis', 'conference-paper')
SUPERVISION_STATUSES = ('active', 'completed', 'inactive')
NOTIFICATION_VARIANTS = ('default', 'destructive')


def utc_now_iso() -> str:
    """当前UTC时间，毫秒精度，Z结尾"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _camel(name: str) -> str:
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)


class RecordMixin:
    """dataclass -> 存储记录(dict)"""

    def to_record(self) -> Dict[str, Any]:
        record = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            record[_camel(f.name)] = value
        return record


@dataclass
class User(RecordMixin):
    """Registered account. The password is stored in plain text."""
    id: str
    email: str
    password: str
    name: str
    role: str
    department: Optional[str] = None
    student_id: Optional[str] = None
    staff_id: Optional[str] = None
    created_at: str = field(default_factory=utc_now_iso)


@dataclass
class ProjectFile(RecordMixin):
    id: str
    name: str
    type: str
    size: int
    url: str
    uploaded_at: str = field(default_factory=utc_now_iso)


@dataclass
class Project(RecordMixin):
    """Student project moving through draft -> submitted -> under-review -> approved/rejected."""
    id: str
    title: str
    description: str
    student_id: str
    supervisor_id: Optional[str] = None
    status: str = 'draft'
    files: List[Dict[str, Any]] = field(default_factory=list)
    citations: List[Dict[str, Any]] = field(default_factory=list)
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    submitted_at: Optional[str] = None


@dataclass
class Material(RecordMixin):
    """Catalog entry (book, journal, article, thesis or conference paper)."""
    id: str
    title: str
    author: str
    type: str
    year: str
    description: str = ''
    keywords: List[str] = field(default_factory=list)
    file_url: Optional[str] = None
    uploaded_by: str = 'admin'
    downloads: int = 0
    created_at: str = field(default_factory=utc_now_iso)


@dataclass
class Citation(RecordMixin):
    """A project's reference to a material, validated by a supervisor."""
    id: str
    material_id: str
    project_id: str
    student_id: str
    is_validated: bool = False
    validated_by: Optional[str] = None
    validation_notes: Optional[str] = None
    created_at: str = field(default_factory=utc_now_iso)


@dataclass
class Supervision(RecordMixin):
    id: str
    student_id: str
    supervisor_id: str
    status: str = 'active'
    created_at: str = field(default_factory=utc_now_iso)


@dataclass
class Notification:
    """User-facing banner emitted by session transitions."""
    title: str
    description: str
    variant: str = 'default'
