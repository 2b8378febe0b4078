from .calculator import compute_status, explain_status
from .dates import parse_date
from .fields import FIELD_MAPPING, resolve_field
from .rules import STATUS_RULES, ProcedureStatus, StatusRule

__all__ = [
    "FIELD_MAPPING",
    "STATUS_RULES",
    "ProcedureStatus",
    "StatusRule",
    "compute_status",
    "explain_status",
    "parse_date",
    "resolve_field",
]
