"""
Role knowledge base.

Per-role technology tables live in ``data/role_profiles.json`` and are
loaded once per process. Adding a role means adding a JSON entry; the
compatibility scorer has no role-specific branches.
"""
import json
import logging
from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import Mapping, Tuple

from ...exceptions import UnknownRoleError
from ...models.roles import RoleProfile

logger = logging.getLogger(__name__)

PROFILES_RESOURCE = "role_profiles.json"


@lru_cache(maxsize=1)
def load_role_profiles() -> Mapping[str, RoleProfile]:
    """
    Load and validate every role profile.

    Returns:
        Read-only mapping of role identifier to its RoleProfile
    """
    raw = (resources.files(__package__) / "data" / PROFILES_RESOURCE).read_text(encoding="utf-8")
    profiles = {
        role: RoleProfile(role=role, **entry)
        for role, entry in json.loads(raw).items()
    }
    logger.debug("Loaded %d role profiles", len(profiles))
    return MappingProxyType(profiles)


def get_role_profile(role: str) -> RoleProfile:
    """
    Look up a role profile.

    Raises:
        UnknownRoleError: If the role has no knowledge base entry
    """
    profiles = load_role_profiles()
    try:
        return profiles[role]
    except KeyError:
        raise UnknownRoleError(role, profiles.keys()) from None


SUPPORTED_ROLES: Tuple[str, ...] = tuple(load_role_profiles())
