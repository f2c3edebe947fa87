"""
Master data: branches, grades and positions.

Each kind carries its own create schema; :data:`ENTITY_SPECS` ties an
:class:`EntityKind` to its read model, create model and URL segment so the
CRUD code can stay generic without optional duck-typed fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, field_validator


class EntityKind(str, Enum):
    BRANCH = "branch"
    GRADE = "grade"
    POSITION = "position"


# ── Read models ─────────────────────────────────────────────────────
class Branch(BaseModel):
    id: str
    company_id: str | None = None
    name: str
    address: str | None = None
    timezone: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Grade(BaseModel):
    id: str
    company_id: str | None = None
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Position(BaseModel):
    id: str
    company_id: str | None = None
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ── Create / update ─────────────────────────────────────────────────
class _NamedCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        if len(v) > 100:
            raise ValueError("Name must not exceed 100 characters")
        return v


class BranchCreate(_NamedCreate):
    address: str | None = None
    timezone: str | None = None


class GradeCreate(_NamedCreate):
    description: str | None = None


class PositionCreate(_NamedCreate):
    description: str | None = None


@dataclass(frozen=True)
class EntitySpec:
    kind: EntityKind
    path: str
    label: str
    read_model: type[BaseModel]
    create_model: type[_NamedCreate]


ENTITY_SPECS: dict[EntityKind, EntitySpec] = {
    EntityKind.BRANCH: EntitySpec(EntityKind.BRANCH, "branches", "Branch", Branch, BranchCreate),
    EntityKind.GRADE: EntitySpec(EntityKind.GRADE, "grades", "Grade", Grade, GradeCreate),
    EntityKind.POSITION: EntitySpec(
        EntityKind.POSITION, "positions", "Position", Position, PositionCreate
    ),
}
