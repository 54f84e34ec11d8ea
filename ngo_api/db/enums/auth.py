"""Auth-related enums."""

from enum import Enum


class Role(str, Enum):
    """
    User roles.

    - ADMIN: full access to every section and to user management
    - EDITOR: builds forms and edits data in the sections granted to them
    - VIEWER: read-only access to the sections granted to them
    """

    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


DEFAULT_ROLE = Role.VIEWER
