from fastapi import Depends, HTTPException
from dependencies.auth import get_current_user, CurrentUser
from core.logging_config import logger
from core.permissions import get_effective_permissions
from core.roles import parse_action, parse_module
from models.permissions import PermissionMatrix


# -----------------------------------------------------
# Collect effective permissions:
#   • role defaults
#   • user-specific override from usuarios.permissoes
# -----------------------------------------------------
def get_user_permissions(user: CurrentUser) -> PermissionMatrix:
    return get_effective_permissions(user.role, user.permissoes)


# -----------------------------------------------------
# Permission evaluation
# -----------------------------------------------------
def has_permission(user: CurrentUser, module, action) -> bool:
    module = parse_module(module)
    action = parse_action(action)

    # Pending invites / deactivated accounts get nothing
    if not user.ativo:
        return False

    return get_user_permissions(user).allows(module, action)


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(module, action):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_permission(Module.purchasing, Action.create))])

    Module / action are parsed here, so a typo fails at import time.
    """
    module = parse_module(module)
    action = parse_action(action)
    permission = f"{module.value}:{action.value}"

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_permission(current_user, module, action):
            logger.info(f"Denied {permission} for user {current_user.id} (role {current_user.role.value})")
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{permission}' required"
            )
        return current_user

    return dependency

