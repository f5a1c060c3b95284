"""
motzkin_store.api.mock_db

In-memory school-equipment catalog.

Responsibilities:
- Hold schools, grades per school, classes per (school, grade) and equipment per
  (school, grade, class).
- Answer lookups scoped by the full chain of ancestor ids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

GradeKey = tuple[int, int]
ClassKey = tuple[int, int, str]


class NotFound(LookupError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"{kind} not found")
        self.kind = kind


@dataclass(slots=True)
class Catalog:
    schools: list[dict[str, Any]] = field(default_factory=list)
    grades: dict[int, list[dict[str, Any]]] = field(default_factory=dict)
    classes: dict[GradeKey, list[dict[str, Any]]] = field(default_factory=dict)
    equipment: dict[ClassKey, list[dict[str, Any]]] = field(default_factory=dict)

    def list_schools(self) -> list[dict[str, Any]]:
        return list(self.schools)

    def list_grades(self, *, school_id: int) -> list[dict[str, Any]]:
        if school_id not in self.grades:
            raise NotFound("School")
        return list(self.grades[school_id])

    def list_classes(self, *, school_id: int, grade_id: int) -> list[dict[str, Any]]:
        self.list_grades(school_id=school_id)
        key = (school_id, grade_id)
        if key not in self.classes:
            raise NotFound("Grade")
        return list(self.classes[key])

    def list_equipment(
        self, *, school_id: int, grade_id: int, class_id: str
    ) -> list[dict[str, Any]]:
        classes = self.list_classes(school_id=school_id, grade_id=grade_id)
        if not any(str(c["id"]) == class_id for c in classes):
            raise NotFound("Class")
        # A known class without a list is valid: "no specific equipment".
        return list(self.equipment.get((school_id, grade_id, class_id), []))


def default_catalog() -> Catalog:
    schools = [
        {"id": 1, "label": "Lincoln HS"},
        {"id": 2, "label": "Roosevelt MS"},
    ]
    grades = {
        1: [{"id": g, "label": f"Grade {g}"} for g in (9, 10, 11, 12)],
        2: [{"id": g, "label": f"Grade {g}"} for g in (6, 7, 8)],
    }
    classes: dict[GradeKey, list[dict[str, Any]]] = {}
    for school_id, school_grades in grades.items():
        for grade in school_grades:
            classes[(school_id, grade["id"])] = [
                {"id": c, "label": f"Class {grade['id']}{c}"} for c in ("A", "B")
            ]
    equipment = {
        (1, 9, "A"): [{"name": "Calculator", "quantity": 30}],
        (1, 9, "B"): [
            {"name": "Calculator", "quantity": 28},
            {"name": "Lab goggles", "quantity": 28},
        ],
        (1, 10, "A"): [{"name": "Graph paper pad", "quantity": 32}],
        (2, 6, "A"): [
            {"name": "Pencil case", "quantity": 25},
            {"name": "Ruler", "quantity": 25},
        ],
    }
    return Catalog(schools=schools, grades=grades, classes=classes, equipment=equipment)
