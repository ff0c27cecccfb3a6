# core/errors.py

from fastapi import HTTPException


# ============================================================
# Permission engine errors
# ============================================================
class PermissionsError(Exception):
    """Base class for permission catalog / policy errors."""

    def __init__(self, message: str = "Permission configuration error"):
        self.message = message
        super().__init__(self.message)


class InvalidRole(PermissionsError, ValueError):
    """Role value outside the role catalog."""

    def __init__(self, role):
        self.role = role
        super().__init__(f"Invalid role: {role!r}")


class InvalidModule(PermissionsError, ValueError):
    """Module id outside the module catalog."""

    def __init__(self, module):
        self.module = module
        super().__init__(f"Invalid module: {module!r}")


class InvalidAction(PermissionsError, ValueError):
    """Action outside ver / criar / editar / excluir."""

    def __init__(self, action):
        self.action = action
        super().__init__(f"Invalid action: {action!r}")


# ============================================================
# Supabase errors
# ============================================================
def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1: Supabase Auth / GoTrue / PostgREST errors
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2: errors with args (common)
    if getattr(error, "args", None):
        return str(error.args[0])

    # Case 3: Plain string fallback
    return str(error) or "Unknown Supabase error"


def handle_supabase_error(error: Exception, operation: str = "Database operation", status_code: int = 500) -> HTTPException:
    """
    Handle Supabase errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    Args:
        error: The exception that occurred
        operation: Description of what operation failed (e.g., "Failed to update user")
        status_code: HTTP status code (default 500)

    Returns:
        HTTPException with standardized error message
    """
    from core.logging_config import logger

    error_detail = extract_supabase_error(error)
    logger.error(f"{operation}: {error_detail}")

    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Record already exists")
    elif "foreign key" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Invalid reference")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    else:
        return HTTPException(status_code=status_code, detail=f"{operation} failed")
