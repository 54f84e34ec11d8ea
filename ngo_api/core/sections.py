"""
Dashboard section registry.

SectionKey is a navigable dashboard view gated by user_section_permissions.
FormSection (db.enums) is the functional area a form template belongs to.
FORM_SECTION_VIEWS links the two so form-scoped endpoints can check the right key.
"""

from dataclasses import dataclass
from enum import Enum

from ngo_api.db.enums import ExtrasKind, FormSection


class SectionKey(str, Enum):
    PIMCO_COMUNIDADES = "pimco-comunidades"
    PIMCO_ESTADISTICA = "pimco-estadistica"
    PIMCO_FORMULARIOS = "pimco-formularios"
    PIMCO_DIAGNOSTICO_COMUNITARIO = "pimco-diagnostico-comunitario"
    ORGANIZACIONES_ESTADISTICA = "organizaciones-estadistica"
    ORGANIZACIONES_FORMULARIOS = "organizaciones-formularios"
    COMUNIDADES_LISTA = "comunidades-lista"
    COMUNIDADES_ESTADISTICA = "comunidades-estadistica"
    COMUNIDADES_FORMULARIOS = "comunidades-formularios"
    COMUNIDADES_PLANTILLAS = "comunidades-plantillas"
    AUDITORIAS_ESTADISTICA = "auditorias-estadistica"
    AUDITORIAS_FORMULARIOS = "auditorias-formularios"
    AUDITORIAS_TABLERO_CONSOLIDADO = "auditorias-tablero-consolidado"
    AUDITORIAS_SEMAFORO = "auditorias-semaforo"
    ABRAZANDO_LEYENDAS = "abrazando-leyendas"
    VOLUNTARIADO_ESTADISTICA = "voluntariado-estadistica"
    VOLUNTARIADO_FORMULARIOS = "voluntariado-formularios"
    VOLUNTARIADO_TABLERO = "voluntariado-tablero"
    ADMIN_PANEL = "admin-panel"

    @classmethod
    def has_value(cls, value: str) -> bool:
        return value in cls._value2member_map_


# Registry order; admins receive exactly this list
ALL_SECTIONS: list[SectionKey] = list(SectionKey)

SECTION_GROUPS: dict[str, list[SectionKey]] = {
    "Perfil Comunitario - PIMCO": [
        SectionKey.PIMCO_COMUNIDADES,
        SectionKey.PIMCO_ESTADISTICA,
        SectionKey.PIMCO_FORMULARIOS,
        SectionKey.PIMCO_DIAGNOSTICO_COMUNITARIO,
    ],
    "Organizaciones": [
        SectionKey.ORGANIZACIONES_ESTADISTICA,
        SectionKey.ORGANIZACIONES_FORMULARIOS,
    ],
    "Comunidades": [
        SectionKey.COMUNIDADES_LISTA,
        SectionKey.COMUNIDADES_ESTADISTICA,
        SectionKey.COMUNIDADES_FORMULARIOS,
        SectionKey.COMUNIDADES_PLANTILLAS,
    ],
    "Auditorías": [
        SectionKey.AUDITORIAS_ESTADISTICA,
        SectionKey.AUDITORIAS_FORMULARIOS,
        SectionKey.AUDITORIAS_TABLERO_CONSOLIDADO,
        SectionKey.AUDITORIAS_SEMAFORO,
    ],
    "Abrazando Leyendas": [SectionKey.ABRAZANDO_LEYENDAS],
    "Voluntariado": [
        SectionKey.VOLUNTARIADO_ESTADISTICA,
        SectionKey.VOLUNTARIADO_FORMULARIOS,
        SectionKey.VOLUNTARIADO_TABLERO,
    ],
}

SECTION_LABELS: dict[SectionKey, str] = {
    SectionKey.PIMCO_COMUNIDADES: "PIMCO - Comunidades",
    SectionKey.PIMCO_ESTADISTICA: "PIMCO - Estadística",
    SectionKey.PIMCO_FORMULARIOS: "PIMCO - Formularios",
    SectionKey.PIMCO_DIAGNOSTICO_COMUNITARIO: "PIMCO - Diagnóstico Comunitario",
    SectionKey.ORGANIZACIONES_ESTADISTICA: "Organizaciones - Estadística",
    SectionKey.ORGANIZACIONES_FORMULARIOS: "Organizaciones - Formularios",
    SectionKey.COMUNIDADES_LISTA: "Comunidades - Lista",
    SectionKey.COMUNIDADES_ESTADISTICA: "Comunidades - Estadística",
    SectionKey.COMUNIDADES_FORMULARIOS: "Comunidades - Formularios",
    SectionKey.COMUNIDADES_PLANTILLAS: "Comunidades - Plantillas",
    SectionKey.AUDITORIAS_ESTADISTICA: "Auditorías - Estadística",
    SectionKey.AUDITORIAS_FORMULARIOS: "Auditorías - Formularios",
    SectionKey.AUDITORIAS_TABLERO_CONSOLIDADO: "Auditorías - Tablero Consolidado",
    SectionKey.AUDITORIAS_SEMAFORO: "Auditorías - Semáforo",
    SectionKey.ABRAZANDO_LEYENDAS: "Abrazando Leyendas",
    SectionKey.VOLUNTARIADO_ESTADISTICA: "Voluntariado - Estadística",
    SectionKey.VOLUNTARIADO_FORMULARIOS: "Voluntariado - Formularios",
    SectionKey.VOLUNTARIADO_TABLERO: "Voluntariado - Tablero",
    SectionKey.ADMIN_PANEL: "Panel de Admin",
}


@dataclass(frozen=True)
class FormSectionViews:
    """Dashboard views that expose data of one form section."""

    forms: SectionKey
    statistics: SectionKey
    extras: ExtrasKind | None = None


FORM_SECTION_VIEWS: dict[FormSection, FormSectionViews] = {
    FormSection.PERFIL_COMUNITARIO: FormSectionViews(
        forms=SectionKey.PIMCO_FORMULARIOS,
        statistics=SectionKey.PIMCO_ESTADISTICA,
    ),
    FormSection.ORGANIZACIONES: FormSectionViews(
        forms=SectionKey.ORGANIZACIONES_FORMULARIOS,
        statistics=SectionKey.ORGANIZACIONES_ESTADISTICA,
    ),
    FormSection.COMUNIDADES: FormSectionViews(
        forms=SectionKey.COMUNIDADES_FORMULARIOS,
        statistics=SectionKey.COMUNIDADES_ESTADISTICA,
    ),
    FormSection.AUDITORIAS: FormSectionViews(
        forms=SectionKey.AUDITORIAS_FORMULARIOS,
        statistics=SectionKey.AUDITORIAS_ESTADISTICA,
        extras=ExtrasKind.BOARD,
    ),
    FormSection.VOLUNTARIADO: FormSectionViews(
        forms=SectionKey.VOLUNTARIADO_FORMULARIOS,
        statistics=SectionKey.VOLUNTARIADO_ESTADISTICA,
        extras=ExtrasKind.VOLUNTEER,
    ),
    FormSection.ABRAZANDO_LEYENDAS: FormSectionViews(
        forms=SectionKey.ABRAZANDO_LEYENDAS,
        statistics=SectionKey.ABRAZANDO_LEYENDAS,
    ),
}


def get_section_views(section_location: str) -> FormSectionViews | None:
    if not FormSection.has_value(section_location):
        return None
    return FORM_SECTION_VIEWS[FormSection(section_location)]
