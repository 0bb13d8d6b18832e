import pytest

from medilink.application.services.schedule_service import (
    ScheduleEditor,
    deduplicate,
    find_duplicate_indices,
    next_available_day,
)
from medilink.exceptions import RequestValidationFailed
from medilink.schemas.schedule import DIAS_SEMANA, DiaSemana, ScheduleEntry


def entry(dia, start="09:00", end="18:00", activo=True):
    return ScheduleEntry(dia_semana=dia, hora_inicio=start, hora_fin=end, activo=activo)


def test_duplicates_reported_on_both_positions():
    entries = [entry(DiaSemana.LUNES), entry(DiaSemana.MARTES), entry(DiaSemana.LUNES)]
    assert find_duplicate_indices(entries) == [0, 2]


def test_duplicates_ignore_active_flag_and_need_same_range():
    entries = [
        entry(DiaSemana.LUNES, activo=True),
        entry(DiaSemana.LUNES, activo=False),
        entry(DiaSemana.LUNES, start="10:00"),
    ]
    assert find_duplicate_indices(entries) == [0, 1]


def test_no_duplicates_in_empty_list():
    assert find_duplicate_indices([]) == []


def test_next_day_wraps_to_monday_when_week_is_full():
    entries = [entry(dia) for dia in DIAS_SEMANA]
    assert next_available_day(entries) == DiaSemana.LUNES


def test_next_day_skips_used_days():
    entries = [entry(DiaSemana.LUNES), entry(DiaSemana.MARTES)]
    assert next_available_day(entries) == DiaSemana.MIERCOLES


def test_next_day_fills_gap_first():
    entries = [entry(DiaSemana.LUNES), entry(DiaSemana.MIERCOLES)]
    assert next_available_day(entries) == DiaSemana.MARTES


def test_deduplicate_keeps_first_occurrence_and_is_idempotent():
    first = entry(DiaSemana.JUEVES, activo=False)
    entries = [first, entry(DiaSemana.LUNES), entry(DiaSemana.JUEVES), entry(DiaSemana.LUNES)]
    once = deduplicate(entries)
    assert [e.dia_semana for e in once] == [DiaSemana.JUEVES, DiaSemana.LUNES]
    assert once[0].activo is False
    assert deduplicate(once) == once


def test_editor_notifies_on_every_change():
    seen = []
    editor = ScheduleEditor(on_change=seen.append)
    editor.add()
    editor.update(0, "hora_fin", "14:00")
    editor.remove(0)
    assert len(seen) == 3
    assert seen[0][0].hora_fin == "18:00"
    assert seen[1][0].hora_fin == "14:00"
    assert seen[2] == []


def test_editor_add_uses_defaults():
    editor = ScheduleEditor()
    out = editor.add()
    assert out == [entry(DiaSemana.LUNES)]


def test_editor_update_rejects_unknown_field_and_bad_time():
    editor = ScheduleEditor([entry(DiaSemana.LUNES)])
    with pytest.raises(RequestValidationFailed):
        editor.update(0, "consultorio", "x")
    with pytest.raises(RequestValidationFailed):
        editor.update(0, "hora_inicio", "25:99")
    assert editor.entries == [entry(DiaSemana.LUNES)]


def test_editor_does_not_check_start_before_end():
    editor = ScheduleEditor([entry(DiaSemana.LUNES)])
    out = editor.update(0, "hora_inicio", "20:00")
    assert out[0].hora_inicio == "20:00"
    assert out[0].hora_fin == "18:00"


def test_editor_remove_out_of_range():
    editor = ScheduleEditor([entry(DiaSemana.LUNES)])
    with pytest.raises(RequestValidationFailed):
        editor.remove(3)


def test_quick_fill_add_and_cleanup_scenario():
    editor = ScheduleEditor()

    editor.quick_fill()
    assert editor.entries == [entry(dia) for dia in DIAS_SEMANA[:5]]
    assert editor.duplicates == []

    editor.add()
    assert editor.entries[5].dia_semana == DiaSemana.SABADO

    editor.add()
    editor.update(6, "dia_semana", "SABADO")
    assert editor.entries[5] == editor.entries[6]
    assert editor.duplicates == [5, 6]
    assert editor.has_duplicates is True

    out = editor.deduplicate()
    assert len(out) == 6
    assert editor.duplicates == []
    assert editor.has_duplicates is False
