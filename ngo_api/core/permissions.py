"""Role permission registry.

Each role row carries a JSON permissions document shaped as
{"forms": {...}, "users": {...}, "submissions": {...}}. Keys are addressed
with dotted paths ("forms.create"). Missing keys default to False (deny).
Admin role: always has all permissions regardless of its stored document.
"""

from dataclasses import dataclass
from enum import Enum

from ngo_api.db.enums import Role


@dataclass(frozen=True)
class PermissionDef:
    """Permission definition with metadata."""
    key: str
    label: str
    category: str


class PermissionCategory(str, Enum):
    FORMS = "forms"
    USERS = "users"
    SUBMISSIONS = "submissions"


PERMISSION_REGISTRY: dict[str, PermissionDef] = {
    "forms.read": PermissionDef("forms.read", "Ver formularios", PermissionCategory.FORMS),
    "forms.create": PermissionDef("forms.create", "Crear formularios", PermissionCategory.FORMS),
    "forms.update": PermissionDef("forms.update", "Editar formularios", PermissionCategory.FORMS),
    "forms.delete": PermissionDef("forms.delete", "Eliminar formularios", PermissionCategory.FORMS),
    "users.manage": PermissionDef("users.manage", "Gestionar usuarios", PermissionCategory.USERS),
    "submissions.view_all": PermissionDef(
        "submissions.view_all", "Ver todas las respuestas", PermissionCategory.SUBMISSIONS
    ),
    "submissions.delete": PermissionDef(
        "submissions.delete", "Eliminar respuestas", PermissionCategory.SUBMISSIONS
    ),
    "submissions.export": PermissionDef(
        "submissions.export", "Exportar respuestas", PermissionCategory.SUBMISSIONS
    ),
}


ROLE_DEFAULTS: dict[Role, set[str]] = {
    Role.ADMIN: set(PERMISSION_REGISTRY.keys()),
    Role.EDITOR: {
        "forms.read",
        "forms.create",
        "forms.update",
        "submissions.view_all",
        "submissions.export",
    },
    Role.VIEWER: {"forms.read"},
}

ROLE_DESCRIPTIONS: dict[Role, str] = {
    Role.ADMIN: "Acceso total al sistema",
    Role.EDITOR: "Puede crear y editar formularios",
    Role.VIEWER: "Solo lectura",
}


def build_permissions_document(granted: set[str]) -> dict:
    """Expand a set of dotted keys into the nested JSON document stored on roles."""
    document: dict[str, dict[str, bool]] = {}
    for key in PERMISSION_REGISTRY:
        category, action = key.split(".", 1)
        document.setdefault(category, {})[action] = key in granted
    return document


def has_permission(role_name: str, document: dict | None, key: str) -> bool:
    """Check a dotted permission key against a role's permissions document."""
    if role_name == Role.ADMIN.value:
        return True
    if not document:
        return False
    category, _, action = key.partition(".")
    section = document.get(category)
    if not isinstance(section, dict):
        return False
    return section.get(action) is True


def is_valid_permission(key: str) -> bool:
    return key in PERMISSION_REGISTRY
