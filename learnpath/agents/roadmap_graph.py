# learnpath/agents/roadmap_graph.py
"""
Roadmap progression state machine.

Every function takes an AgentState and returns an AgentState; inputs are never
modified. Calls that cannot apply (unknown id, index out of range, roadmap
already finished) return the state they were given.

Per-module status moves not_started -> in_progress -> completed. Activating a
module (next/previous/jump/back) completes the module being left and pushes
its id onto the navigation history.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from learnpath.agents.llm.base import LLMClient
from learnpath.agents.llm.client import get_llm_client
from learnpath.agents.planner import generate_roadmap_markdown
from learnpath.agents.schemas import (
    AgentState,
    Module,
    ModuleStatus,
    ParsedModule,
    RoadmapProgress,
    RoadmapState,
)
from learnpath.utils.markdown import parse_roadmap_markdown

logger = logging.getLogger(__name__)

DEFAULT_ESTIMATED_DURATION = "1-2 weeks"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def generate_id(prefix: str = "") -> str:
    return f"{prefix}{uuid.uuid4().hex}"


def create_agent_state(
    topic: str = "",
    roadmap: str = "",
    description: str = "",
    modules: Sequence[Module] = (),
) -> AgentState:
    now = _now()
    return AgentState(
        topic=topic,
        roadmap=roadmap,
        state=RoadmapState(
            id=generate_id("roadmap_"),
            topic=topic,
            description=description,
            modules=tuple(modules),
            created_at=now,
            updated_at=now,
        ),
    )


def build_modules(parsed: Sequence[ParsedModule]) -> Tuple[Module, ...]:
    """Assign ids and titles; each module depends on the previous one's level."""
    modules = []
    for index, p in enumerate(parsed):
        modules.append(
            Module(
                id=generate_id("module_"),
                title=f"Module {index + 1}: {p.level}",
                level=p.level,
                content=p.content,
                context=p.context,
                status=ModuleStatus.NOT_STARTED,
                completed_steps=0,
                total_steps=len(p.content),
                prerequisites=(parsed[index - 1].level,) if index > 0 else (),
                estimated_duration=DEFAULT_ESTIMATED_DURATION,
            )
        )
    return tuple(modules)


def initialize(topic: str, description: str = "", *, llm: Optional[LLMClient] = None) -> AgentState:
    llm = llm or get_llm_client()

    markdown = generate_roadmap_markdown(llm, topic)
    modules = build_modules(parse_roadmap_markdown(markdown))

    state = create_agent_state(topic=topic, roadmap=markdown, description=description, modules=modules)
    logger.info("Created roadmap %s for topic=%r with %d modules", state.state.id, topic, len(modules))

    if modules:
        return _activate(state, modules[0].id)
    return state


# -------------------------
# Internal transitions
# -------------------------
def _replace_roadmap(state: AgentState, *, history: Optional[Tuple[str, ...]] = None,
                     is_complete: Optional[bool] = None, **roadmap_changes) -> AgentState:
    roadmap_changes["updated_at"] = _now()
    changes = {"state": state.state.model_copy(update=roadmap_changes)}
    if history is not None:
        changes["navigation_history"] = history
    if is_complete is not None:
        changes["is_complete"] = is_complete
    return state.model_copy(update=changes)


def _activate(state: AgentState, module_id: str) -> AgentState:
    if get_module(state, module_id) is None:
        return state

    leaving_id = state.state.current_module_id
    history = state.navigation_history
    if leaving_id is not None:
        history = history + (leaving_id,)

    modules = []
    for m in state.state.modules:
        if m.id == module_id:
            m = m.model_copy(update={"status": ModuleStatus.IN_PROGRESS})
        elif m.id == leaving_id:
            m = m.model_copy(update={"status": ModuleStatus.COMPLETED})
        modules.append(m)

    return _replace_roadmap(state, history=history, modules=tuple(modules), current_module_id=module_id)


def _finish(state: AgentState, modules: Optional[Tuple[Module, ...]] = None) -> AgentState:
    changes = {"current_module_id": None}
    if modules is not None:
        changes["modules"] = modules
    logger.info("Roadmap %s complete", state.state.id)
    return _replace_roadmap(state, is_complete=True, **changes)


def _index_of(state: AgentState, module_id: Optional[str]) -> int:
    for i, m in enumerate(state.state.modules):
        if m.id == module_id:
            return i
    return -1


# -------------------------
# Queries
# -------------------------
def get_current_state(state: AgentState) -> AgentState:
    return state


def get_roadmap_state(state: AgentState) -> RoadmapState:
    return state.state


def get_module(state: AgentState, module_id: str) -> Optional[Module]:
    return next((m for m in state.state.modules if m.id == module_id), None)


def get_next_module(state: AgentState) -> Optional[Module]:
    modules = state.state.modules
    if state.state.current_module_id is None:
        return modules[0] if modules else None

    index = _index_of(state, state.state.current_module_id)
    if index == -1 or index >= len(modules) - 1:
        return None
    return modules[index + 1]


def get_previous_module(state: AgentState) -> Optional[Module]:
    if state.state.current_module_id is None:
        return None

    index = _index_of(state, state.state.current_module_id)
    if index <= 0:
        return None
    return state.state.modules[index - 1]


def get_navigation_history(state: AgentState) -> List[str]:
    return list(state.navigation_history)


def get_module_dependencies(state: AgentState, module_id: str) -> List[Module]:
    """
    Modules sharing at least one prerequisite level with the given module,
    the module itself included.
    """
    target = get_module(state, module_id)
    if target is None or not target.prerequisites:
        return []

    wanted = set(target.prerequisites)
    return [m for m in state.state.modules if wanted.intersection(m.prerequisites)]


def get_progress(state: AgentState) -> RoadmapProgress:
    completed = len(state.state.completed_modules)
    total = len(state.state.modules)
    percentage = round(100 * completed / total) if total > 0 else 0
    return RoadmapProgress(
        current=state.current_step + 1,
        total=total,
        percentage=percentage,
        completed=completed,
    )


# -------------------------
# Navigation
# -------------------------
def next_module(state: AgentState) -> AgentState:
    if state.is_complete or not state.state.modules:
        return state

    upcoming = get_next_module(state)
    if upcoming is None:
        return _finish(state)
    return _activate(state, upcoming.id)


def previous_module(state: AgentState) -> AgentState:
    if state.is_complete:
        return state

    prev = get_previous_module(state)
    if prev is None:
        return state
    return _activate(state, prev.id)


def go_to_step(state: AgentState, step: int) -> AgentState:
    if state.is_complete:
        return state
    if step < 0 or step >= len(state.state.modules):
        logger.debug("go_to_step(%d) out of range for roadmap %s", step, state.state.id)
        return state
    return _activate(state, state.state.modules[step].id)


def go_to_module(state: AgentState, module_id: str) -> AgentState:
    if state.is_complete:
        return state
    if get_module(state, module_id) is None:
        logger.debug("go_to_module(%s): unknown module in roadmap %s", module_id, state.state.id)
        return state
    return _activate(state, module_id)


def go_back(state: AgentState) -> AgentState:
    if state.is_complete or not state.navigation_history:
        return state

    *rest, last_id = state.navigation_history
    return go_to_module(state.model_copy(update={"navigation_history": tuple(rest)}), last_id)


# -------------------------
# Completion and step progress
# -------------------------
def complete_module(state: AgentState, module_id: str) -> AgentState:
    if get_module(state, module_id) is None:
        return state

    modules = tuple(
        m.model_copy(update={"status": ModuleStatus.COMPLETED}) if m.id == module_id else m
        for m in state.state.modules
    )

    if all(m.status == ModuleStatus.COMPLETED for m in modules):
        return _finish(state, modules)
    return _replace_roadmap(state, modules=modules)


def update_module_progress(state: AgentState, module_id: str, completed_steps: int) -> AgentState:
    if get_module(state, module_id) is None:
        return state

    modules = tuple(
        m.model_copy(update={"completed_steps": max(0, min(completed_steps, m.total_steps))})
        if m.id == module_id else m
        for m in state.state.modules
    )
    return _replace_roadmap(state, modules=modules)
