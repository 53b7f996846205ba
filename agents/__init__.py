"""Role specifications for the teaching-assistant handlers."""

from .ta_roles import DEFAULT_ROLES, ROLES_BY_NAME, TARoleSpec

__all__ = ["DEFAULT_ROLES", "ROLES_BY_NAME", "TARoleSpec"]
