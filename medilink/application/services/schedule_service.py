import logging
from typing import Any, Callable, List, Optional

from pydantic import ValidationError

from ...exceptions import RequestValidationFailed
from ...schemas.schedule import DIAS_SEMANA, DiaSemana, ScheduleEntry

logger = logging.getLogger(__name__)

DEFAULT_START = "09:00"
DEFAULT_END = "18:00"
EDITABLE_FIELDS = ("dia_semana", "hora_inicio", "hora_fin", "activo")
DUPLICATES_WARNING = "Tienes horarios duplicados. Se eliminarán automáticamente al enviar."


def find_duplicate_indices(entries: List[ScheduleEntry]) -> List[int]:
    """Positions sharing (day, start, end) with at least one other position."""
    duplicates = []
    for index, entry in enumerate(entries):
        if any(i != index and other.key() == entry.key() for i, other in enumerate(entries)):
            duplicates.append(index)
    return duplicates


def next_available_day(entries: List[ScheduleEntry]) -> DiaSemana:
    """First weekday (Monday first) not used yet; Monday once all seven are taken."""
    used = {entry.dia_semana for entry in entries}
    for dia in DIAS_SEMANA:
        if dia not in used:
            return dia
    return DiaSemana.LUNES


def deduplicate(entries: List[ScheduleEntry]) -> List[ScheduleEntry]:
    seen = set()
    unique = []
    for entry in entries:
        if entry.key() in seen:
            continue
        seen.add(entry.key())
        unique.append(entry)
    return unique


def weekday_template(start: str = DEFAULT_START, end: str = DEFAULT_END) -> List[ScheduleEntry]:
    return [
        ScheduleEntry(dia_semana=dia, hora_inicio=start, hora_fin=end, activo=True)
        for dia in DIAS_SEMANA[:5]
    ]


class ScheduleEditor:
    """Ordered in-memory list of a doctor's weekly schedule entries.

    Each mutation builds a fresh list, keeps it and hands it to ``on_change``.
    Start/end ordering is not checked here.
    """

    def __init__(self, entries: Optional[List[ScheduleEntry]] = None, on_change: Optional[Callable[[List[ScheduleEntry]], None]] = None):
        self._entries: List[ScheduleEntry] = list(entries or [])
        self._on_change = on_change

    @property
    def entries(self) -> List[ScheduleEntry]:
        return list(self._entries)

    @property
    def duplicates(self) -> List[int]:
        return find_duplicate_indices(self._entries)

    @property
    def has_duplicates(self) -> bool:
        return len(self.duplicates) > 0

    def _commit(self, entries: List[ScheduleEntry]) -> List[ScheduleEntry]:
        self._entries = entries
        if self._on_change is not None:
            self._on_change(list(entries))
        return self.entries

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._entries):
            raise RequestValidationFailed(f"Horario {index} no existe")

    def add(self) -> List[ScheduleEntry]:
        entry = ScheduleEntry(
            dia_semana=next_available_day(self._entries),
            hora_inicio=DEFAULT_START,
            hora_fin=DEFAULT_END,
            activo=True,
        )
        return self._commit(self._entries + [entry])

    def remove(self, index: int) -> List[ScheduleEntry]:
        self._check_index(index)
        return self._commit([e for i, e in enumerate(self._entries) if i != index])

    def update(self, index: int, field: str, value: Any) -> List[ScheduleEntry]:
        self._check_index(index)
        if field not in EDITABLE_FIELDS:
            raise RequestValidationFailed(f"Campo de horario desconocido: {field}")
        data = self._entries[index].model_dump()
        data[field] = value
        try:
            updated = ScheduleEntry(**data)
        except ValidationError as e:
            raise RequestValidationFailed(f"Valor inválido para {field}: {e.errors()[0]['msg']}")
        entries = list(self._entries)
        entries[index] = updated
        return self._commit(entries)

    def quick_fill(self) -> List[ScheduleEntry]:
        return self._commit(weekday_template())

    def deduplicate(self) -> List[ScheduleEntry]:
        before = len(self._entries)
        entries = deduplicate(self._entries)
        if len(entries) != before:
            logger.info(f"Removed {before - len(entries)} duplicate schedule entries")
        return self._commit(entries)
