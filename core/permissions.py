# ============================================
# CENTRALIZED ROLE → PERMISSION MATRIX
#
# Default matrices per role, plus the merge of a
# user's stored override (usuarios.permissoes) on
# top of them. Pure functions, no I/O.
# ============================================
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Optional

from core.logging_config import logger
from core.roles import parse_role
from models.enums import Action, Module, Role
from models.permissions import PermissionCell, PermissionMatrix


VIEW_ONLY = PermissionCell(ver=True, criar=False, editar=False, excluir=False)
FULL_ACCESS = PermissionCell(ver=True, criar=True, editar=True, excluir=True)

# Filler for gaps in a partial override when the caller gives no baseline
NORMALIZE_BASELINE = Role.member

ExplicitOverrides = Dict[Module, Dict[Action, bool]]


# =====================================================
# DEFAULTS BY ROLE
# =====================================================
def build_default_permissions(role: Role) -> PermissionMatrix:
    role = parse_role(role)

    base = PermissionCell(
        ver=True,
        criar=role != Role.viewer,
        editar=role != Role.viewer,
        excluir=role == Role.admin,
    )
    cells = {module.value: base for module in Module}

    # Viewer: view only, everywhere
    if role == Role.viewer:
        cells = {module.value: VIEW_ONLY for module in Module}

    # Settings: only admin manages the tenant; everyone may view their own account
    if role == Role.admin:
        cells[Module.settings.value] = FULL_ACCESS
    else:
        cells[Module.settings.value] = VIEW_ONLY

    return PermissionMatrix(**cells)


DEFAULT_PERMISSIONS: Mapping = MappingProxyType(
    {role: build_default_permissions(role) for role in Role}
)


def get_default_permissions(role: Any) -> PermissionMatrix:
    """Default matrix for a role. Raises InvalidRole for unknown roles."""
    return DEFAULT_PERMISSIONS[parse_role(role)]


# =====================================================
# OVERRIDES
# =====================================================
def is_customized(overrides: Any) -> bool:
    """True when a stored override should replace the role defaults."""
    if isinstance(overrides, PermissionMatrix):
        return True
    return isinstance(overrides, Mapping) and len(overrides) > 0


def _explicit_overrides(overrides: Any) -> ExplicitOverrides:
    """
    Collect only the (module, action) values the caller actually set.

    Unknown modules and actions are ignored, and so is any value that is
    not a real bool: None means "not set", it never means False.
    """
    if isinstance(overrides, PermissionMatrix):
        return {
            module: {action: cell.allows(action) for action in Action}
            for module, cell in overrides.cells()
        }

    explicit: ExplicitOverrides = {}
    for module_key, raw_cell in overrides.items():
        module = Module.lookup(module_key)
        if module is None or not isinstance(raw_cell, Mapping):
            continue

        values = explicit.setdefault(module, {})
        for action_key, value in raw_cell.items():
            action = Action.lookup(action_key)
            if action is not None and isinstance(value, bool):
                values[action] = value

    return explicit


def _merge(explicit: ExplicitOverrides, base: PermissionMatrix) -> PermissionMatrix:
    cells = {}
    for module, fallback in base.cells():
        given = explicit.get(module, {})
        cells[module.value] = PermissionCell(
            **{action.value: given.get(action, fallback.allows(action)) for action in Action}
        )
    return PermissionMatrix(**cells)


# =====================================================
# EFFECTIVE PERMISSIONS
# =====================================================
def get_effective_permissions(role: Any, overrides: Any = None) -> PermissionMatrix:
    """
    Effective matrix for a user: per-cell fallback merge of the override
    on top of the role defaults.

    None, {} and non-mapping overrides all mean "use the role defaults".
    """
    defaults = get_default_permissions(role)

    if overrides is not None and not isinstance(overrides, (Mapping, PermissionMatrix)):
        logger.debug(f"Ignoring malformed permission overrides of type {type(overrides).__name__}")
        return defaults

    if not is_customized(overrides):
        return defaults

    return _merge(_explicit_overrides(overrides), defaults)


def normalize_permissions(overrides: Any, baseline: Any = NORMALIZE_BASELINE) -> Optional[PermissionMatrix]:
    """
    Complete a (possibly partial) override before it is persisted.

    Returns None for None / non-mapping input, which is also the value to
    store for "no customization". Otherwise every module and action is
    present; gaps come from the baseline role's defaults.
    """
    if overrides is None:
        return None

    if not isinstance(overrides, (Mapping, PermissionMatrix)):
        logger.debug(f"Normalizing malformed permission overrides of type {type(overrides).__name__} to None")
        return None

    return _merge(_explicit_overrides(overrides), get_default_permissions(baseline))
