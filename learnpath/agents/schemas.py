## Pydantic models for roadmap modules and progression state
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ModuleStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class ParsedModule(BaseModel):
    """One heading section of planner markdown, before ids are assigned."""
    model_config = ConfigDict(frozen=True)

    level: str
    content: Tuple[str, ...] = ()
    context: Tuple[str, ...] = ()


class Module(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    level: str
    content: Tuple[str, ...] = ()
    context: Tuple[str, ...] = ()
    status: ModuleStatus = ModuleStatus.NOT_STARTED
    completed_steps: int = Field(default=0, ge=0)
    total_steps: int = Field(default=0, ge=0)
    prerequisites: Tuple[str, ...] = ()
    estimated_duration: Optional[str] = None


class RoadmapState(BaseModel):
    """
    Authoritative module sequence for one roadmap.
    Completed/in-progress ids and the percentage are derived from module
    statuses on read, so they cannot drift from `modules`.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    topic: str = ""
    description: str = ""
    modules: Tuple[Module, ...] = ()
    current_module_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def completed_modules(self) -> Tuple[str, ...]:
        return tuple(m.id for m in self.modules if m.status == ModuleStatus.COMPLETED)

    @computed_field
    @property
    def in_progress_modules(self) -> Tuple[str, ...]:
        return tuple(m.id for m in self.modules if m.status == ModuleStatus.IN_PROGRESS)

    @computed_field
    @property
    def progress(self) -> int:
        if not self.modules:
            return 0
        return round(100 * len(self.completed_modules) / len(self.modules))


class AgentState(BaseModel):
    model_config = ConfigDict(frozen=True)

    topic: str = ""
    roadmap: str = ""
    is_complete: bool = False
    state: RoadmapState
    navigation_history: Tuple[str, ...] = ()

    @computed_field
    @property
    def modules(self) -> Tuple[Module, ...]:
        return self.state.modules

    @computed_field
    @property
    def current_module(self) -> Optional[Module]:
        current_id = self.state.current_module_id
        if current_id is None:
            return None
        return next((m for m in self.state.modules if m.id == current_id), None)

    @computed_field
    @property
    def current_step(self) -> int:
        # Index of the active module; the last index once the roadmap is finished.
        current_id = self.state.current_module_id
        for i, m in enumerate(self.state.modules):
            if m.id == current_id:
                return i
        if self.is_complete and self.state.modules:
            return len(self.state.modules) - 1
        return 0

    @computed_field
    @property
    def total_steps(self) -> int:
        return len(self.state.modules)


class RoadmapProgress(BaseModel):
    current: int
    total: int
    percentage: int
    completed: int
