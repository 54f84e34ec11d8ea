"""Tests for slug generation and section parsing in the form service."""
import re

import pytest

from ngo_api.db.enums import FormSection
from ngo_api.services.form_service import generate_unique_slug, parse_section_location, slugify


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Auditoría Año 2024", "auditoria-ano-2024"),
        ("  Registro de Voluntarios  ", "registro-de-voluntarios"),
        ("Perfil ¿Comunitario?", "perfil-comunitario"),
        ("Niños -- y -- Niñas", "ninos-y-ninas"),
        ("¡¡!!", "formulario"),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_generate_unique_slug_appends_hex_suffix(db):
    slug = generate_unique_slug(db, "Diagnóstico Comunitario")
    assert re.fullmatch(r"diagnostico-comunitario-[0-9a-f]{6}", slug)
    assert slug != generate_unique_slug(db, "Diagnóstico Comunitario")


def test_parse_section_location():
    assert parse_section_location(None) is None
    assert parse_section_location("") is None
    assert parse_section_location("auditorias") == FormSection.AUDITORIAS
    with pytest.raises(ValueError, match="Invalid section_location"):
        parse_section_location("finanzas")
