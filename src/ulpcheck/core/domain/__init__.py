"""
Domain models and value objects.

Contains the discrete classifications and the input sample model.
"""

from ulpcheck.core.domain.sample import DomainSample
from ulpcheck.core.domain.ulp_class import Ordering, UlpClass

__all__ = [
    "DomainSample",
    "Ordering",
    "UlpClass",
]
