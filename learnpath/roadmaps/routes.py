# Roadmap session endpoints
from typing import Annotated, Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from markdown_it import MarkdownIt
from pydantic import BaseModel, StringConstraints

from learnpath.agents import roadmap_graph
from learnpath.agents.llm.base import LLMClient
from learnpath.agents.llm.client import get_llm_client
from learnpath.agents.schemas import AgentState
from learnpath.roadmaps.store import RoadmapSessionStore, SessionNotFound, get_store
from learnpath.utils.markdown import module_content_markdown

router = APIRouter(prefix="/roadmaps")

md = MarkdownIt("js-default")  # disables raw HTML parsing vs commonmark


class CreateRoadmapRequest(BaseModel):
    topic: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    description: Annotated[str, StringConstraints(strip_whitespace=True)] = ""


class ModuleProgressRequest(BaseModel):
    completed_steps: int


def _not_found(details: str) -> JSONResponse:
    return JSONResponse({"error": "not_found", "details": details}, status_code=404)


def _apply(store: RoadmapSessionStore, session_id: str,
           transition: Callable[[AgentState], AgentState]):
    try:
        session = store.get(session_id)
    except SessionNotFound as e:
        return _not_found(str(e))
    return store.save_context(session_id, transition(session.context)).context


@router.post("", status_code=201)
def create_roadmap(
    body: CreateRoadmapRequest,
    llm: LLMClient = Depends(get_llm_client),
    store: RoadmapSessionStore = Depends(get_store),
):
    context = roadmap_graph.initialize(body.topic, body.description, llm=llm)
    return store.create(context)


@router.get("/{session_id}")
def get_roadmap(session_id: str, store: RoadmapSessionStore = Depends(get_store)):
    try:
        return store.get(session_id)
    except SessionNotFound as e:
        return _not_found(str(e))


@router.post("/{session_id}/next")
def next_module(session_id: str, store: RoadmapSessionStore = Depends(get_store)):
    return _apply(store, session_id, roadmap_graph.next_module)


@router.post("/{session_id}/previous")
def previous_module(session_id: str, store: RoadmapSessionStore = Depends(get_store)):
    return _apply(store, session_id, roadmap_graph.previous_module)


@router.post("/{session_id}/back")
def go_back(session_id: str, store: RoadmapSessionStore = Depends(get_store)):
    return _apply(store, session_id, roadmap_graph.go_back)


@router.post("/{session_id}/steps/{step}")
def go_to_step(session_id: str, step: int, store: RoadmapSessionStore = Depends(get_store)):
    return _apply(store, session_id, lambda s: roadmap_graph.go_to_step(s, step))


@router.get("/{session_id}/progress")
def get_progress(session_id: str, store: RoadmapSessionStore = Depends(get_store)):
    try:
        session = store.get(session_id)
    except SessionNotFound as e:
        return _not_found(str(e))
    return roadmap_graph.get_progress(session.context)


@router.get("/{session_id}/history")
def get_history(session_id: str, store: RoadmapSessionStore = Depends(get_store)):
    try:
        session = store.get(session_id)
    except SessionNotFound as e:
        return _not_found(str(e))
    return {"navigation_history": roadmap_graph.get_navigation_history(session.context)}


@router.get("/{session_id}/modules/{module_id}")
def get_module(session_id: str, module_id: str, store: RoadmapSessionStore = Depends(get_store)):
    try:
        session = store.get(session_id)
    except SessionNotFound as e:
        return _not_found(str(e))

    module = roadmap_graph.get_module(session.context, module_id)
    if module is None:
        return _not_found(f"No module {module_id} in roadmap session {session_id}")

    return {
        **module.model_dump(mode="json"),
        "content_html": md.render(module_content_markdown(module.content)),
    }


@router.get("/{session_id}/modules/{module_id}/dependencies")
def get_module_dependencies(session_id: str, module_id: str,
                            store: RoadmapSessionStore = Depends(get_store)):
    try:
        session = store.get(session_id)
    except SessionNotFound as e:
        return _not_found(str(e))
    return roadmap_graph.get_module_dependencies(session.context, module_id)


@router.post("/{session_id}/modules/{module_id}/activate")
def activate_module(session_id: str, module_id: str, store: RoadmapSessionStore = Depends(get_store)):
    return _apply(store, session_id, lambda s: roadmap_graph.go_to_module(s, module_id))


@router.post("/{session_id}/modules/{module_id}/complete")
def complete_module(session_id: str, module_id: str, store: RoadmapSessionStore = Depends(get_store)):
    return _apply(store, session_id, lambda s: roadmap_graph.complete_module(s, module_id))


@router.put("/{session_id}/modules/{module_id}/progress")
def update_module_progress(
    session_id: str,
    module_id: str,
    body: ModuleProgressRequest,
    store: RoadmapSessionStore = Depends(get_store),
):
    return _apply(
        store, session_id,
        lambda s: roadmap_graph.update_module_progress(s, module_id, body.completed_steps),
    )
