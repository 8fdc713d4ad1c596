from enum import Enum

# ------------------------------- Base Models ------------------------------- #

class ApiStatus(str, Enum):
    """Outcome of a recalculation run"""
    SUCCESS = "success"
    ERROR = "error"
