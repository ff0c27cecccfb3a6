# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    Role,
    Module,
    Action,
)

__all__ = [
    "BaseStrEnum",
    "Role",
    "Module",
    "Action",
]
