from fastapi import APIRouter
import logging

from ..application.services.schedule_service import DUPLICATES_WARNING, ScheduleEditor
from ..schemas.schedule import ScheduleRemove, ScheduleResponse, ScheduleState, ScheduleUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedule", tags=["Schedule"])


def _respond(editor: ScheduleEditor) -> ScheduleResponse:
    return ScheduleResponse(
        horarios=editor.entries,
        duplicate_indices=editor.duplicates,
        has_duplicates=editor.has_duplicates,
        warning=DUPLICATES_WARNING if editor.has_duplicates else None,
    )


@router.post("/inspect", response_model=ScheduleResponse)
def inspect_schedule(state: ScheduleState):
    return _respond(ScheduleEditor(state.horarios))


@router.post("/add", response_model=ScheduleResponse)
def add_entry(state: ScheduleState):
    editor = ScheduleEditor(state.horarios)
    editor.add()
    return _respond(editor)


@router.post("/remove", response_model=ScheduleResponse)
def remove_entry(body: ScheduleRemove):
    editor = ScheduleEditor(body.horarios)
    editor.remove(body.index)
    return _respond(editor)


@router.post("/update", response_model=ScheduleResponse)
def update_entry(body: ScheduleUpdate):
    editor = ScheduleEditor(body.horarios)
    editor.update(body.index, body.field, body.value)
    return _respond(editor)


@router.post("/quick-fill", response_model=ScheduleResponse)
def quick_fill(state: ScheduleState):
    editor = ScheduleEditor(state.horarios)
    editor.quick_fill()
    return _respond(editor)


@router.post("/deduplicate", response_model=ScheduleResponse)
def deduplicate_entries(state: ScheduleState):
    editor = ScheduleEditor(state.horarios)
    editor.deduplicate()
    return _respond(editor)
