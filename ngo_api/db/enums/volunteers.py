"""Volunteer registry enums."""

from enum import Enum


class VolunteerType(str, Enum):
    AGRICULTURAL = "Agrícola"
    GROCERIES = "Víveres"
    PICKING = "Picking"


class VolunteerShift(str, Enum):
    MORNING = "Mañana"
    AFTERNOON = "Tarde"
    FULL_DAY = "Día completo"
