"""
This module provides the comparison of proxied and non-proxied objects
"""
from .comparer import InstanceProxyComparer, Proxied, Plain, Operand, operand, null_safe_equals

__all__ = [
    "InstanceProxyComparer",
    "Proxied",
    "Plain",
    "Operand",
    "operand",
    "null_safe_equals"
]
