"""Error-Bound Checker: проверка границ ошибки float функций.

- Деление и sqrt: correctly rounded (EXACT)
- exp, ln, log10, sin, cos, tan, atan, asin, acos, hypot, pow: WITHIN_1
- pow проверяется bounded сравнением
"""

from .bound_checker import FUNCTION_BOUNDS, ErrorBoundChecker
from .results import CheckResult

__all__ = [
    "FUNCTION_BOUNDS",
    "ErrorBoundChecker",
    "CheckResult",
]
