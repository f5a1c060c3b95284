"""
motzkin_store.pipeline.stages

Static definition of the selection chain.

Responsibilities:
- Name each stage, its endpoint, and the query parameter its selection contributes.
- Provide the display strings renderers show for each stage.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StageSpec:
    name: str
    label: str
    plural: str
    path: str
    # Query key under which this stage's selected id is sent to deeper stages.
    param: str


@dataclass(frozen=True, slots=True)
class ResourceSpec:
    name: str
    path: str


SCHOOL_CHAIN: tuple[StageSpec, ...] = (
    StageSpec(
        name="school", label="School", plural="Schools", path="/api/schools", param="school_id"
    ),
    StageSpec(name="grade", label="Grade", plural="Grades", path="/api/grades", param="grade_id"),
    StageSpec(
        name="class", label="Class", plural="Classes", path="/api/classes", param="class_id"
    ),
)

EQUIPMENT_RESOURCE = ResourceSpec(name="equipment", path="/api/equipment")
