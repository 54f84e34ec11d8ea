"""Enums for section-specific extras records."""

from enum import Enum


class ExtrasKind(str, Enum):
    """Extras table a section writes to."""

    VOLUNTEER = "volunteer_extras"
    BOARD = "consolidated_board_extras"


class TrafficLight(str, Enum):
    """Audit board traffic light (semáforo)."""

    RED = "Rojo"
    YELLOW = "Amarillo"
    GREEN = "Verde"


class FollowUpStatus(str, Enum):
    """Follow-up progress for an audit board entry."""

    NOT_STARTED = "No iniciado"
    IN_PROGRESS = "En proceso"
    COMPLETED = "Completado"


class ConcludedResult(str, Enum):
    YES = "Sí"
    NO = "No"
