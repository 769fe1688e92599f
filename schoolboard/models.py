"""
Document models for the school board collections.

Each model serialises to the camelCase shape stored in the record store and
returned over the API, and can be rebuilt from a stored dict with
``from_dict``. Ids and timestamps are generated here so every backend stores
the same shape.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ALL = 'all'


def new_id() -> str:
    return uuid.uuid4().hex


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Teacher
# ---------------------------------------------------------------------------

@dataclass
class Teacher:
    name: str
    email: str
    password: str
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def public_dict(self) -> Dict[str, Any]:
        data = self.to_dict()
        del data['password']
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Teacher:
        return cls(
            id=data.get('id', ''),
            name=data.get('name', ''),
            email=data.get('email', ''),
            password=data.get('password'),
        )


@dataclass
class TeacherRef:
    """Point-in-time copy of a teacher's id and name."""
    id: str
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        # A missing name is left out rather than stored as null.
        if self.name is None:
            return {'id': self.id}
        return {'id': self.id, 'name': self.name}

    @classmethod
    def from_payload(cls, payload) -> Optional[TeacherRef]:
        if not isinstance(payload, dict) or not payload.get('id'):
            return None
        return cls(id=payload['id'], name=payload.get('name'))

    from_dict = from_payload


# ---------------------------------------------------------------------------
# Task / Announcement / Upload
# ---------------------------------------------------------------------------

@dataclass
class Task:
    grade: str
    classLetter: str
    subject: str
    description: str
    dueDate: str
    teacher: TeacherRef
    done: bool = False
    id: str = field(default_factory=new_id)
    createdAt: str = field(default_factory=_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['teacher'] = self.teacher.to_dict() if self.teacher else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Task:
        return cls(
            id=data.get('id', ''),
            grade=str(data.get('grade', '')),
            classLetter=str(data.get('classLetter', '')),
            subject=data.get('subject', ''),
            description=data.get('description', ''),
            dueDate=data.get('dueDate', ''),
            teacher=TeacherRef.from_dict(data.get('teacher')),
            done=bool(data.get('done', False)),
            createdAt=data.get('createdAt'),
        )


@dataclass
class Announcement:
    grade: str
    classLetter: str
    message: str
    teacher: TeacherRef
    id: str = field(default_factory=new_id)
    createdAt: str = field(default_factory=_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['teacher'] = self.teacher.to_dict() if self.teacher else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Announcement:
        return cls(
            id=data.get('id', ''),
            grade=str(data.get('grade', '')),
            classLetter=str(data.get('classLetter', '')),
            message=data.get('message', ''),
            teacher=TeacherRef.from_dict(data.get('teacher')),
            createdAt=data.get('createdAt'),
        )


@dataclass
class Upload:
    teacherId: str
    filename: str          # resolved storage or placeholder URL
    originalName: str
    grade: str = ALL
    classLetter: str = ALL
    id: str = field(default_factory=new_id)
    uploadedAt: str = field(default_factory=_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Upload:
        return cls(
            id=data.get('id', ''),
            teacherId=str(data.get('teacherId', '')),
            filename=data.get('filename', ''),
            originalName=data.get('originalName', ''),
            grade=str(data.get('grade', ALL)),
            classLetter=str(data.get('classLetter', ALL)),
            uploadedAt=data.get('uploadedAt'),
        )


# ---------------------------------------------------------------------------
# School settings (singleton)
# ---------------------------------------------------------------------------

@dataclass
class SchoolSettings:
    schoolName: str
    schoolLogo: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
