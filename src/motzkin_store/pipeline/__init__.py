"""
motzkin_store.pipeline

Hierarchical dependent-selection pipeline (school -> grade -> class -> equipment).

Responsibilities:
- Selection store, request resolution, fetch orchestration and the cascade
  state machine that ties them together.
"""

from motzkin_store.pipeline.controller import CascadeController
from motzkin_store.pipeline.models import EquipmentEntry, SelectItem, StageStatus
from motzkin_store.pipeline.view import PipelineView, StageView

__all__ = [
    "CascadeController",
    "EquipmentEntry",
    "PipelineView",
    "SelectItem",
    "StageStatus",
    "StageView",
]


# --- Module Notes -----------------------------------------------------------
# Renderers should only need `CascadeController`, its views, and `SelectItem`.
