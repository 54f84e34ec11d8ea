"""Community registry enums."""

from enum import Enum


class CommunityStatus(str, Enum):
    ACTIVE = "activa"
    INACTIVE = "inactiva"
    SUSPENDED = "suspendida"


class CommunityClassification(str, Enum):
    SMALL = "Pequeña"
    MEDIUM = "Mediana"
    LARGE = "Grande"
