"""Beneficiary enums."""

from enum import Enum


class Gender(str, Enum):
    MALE = "Masculino"
    FEMALE = "Femenino"
