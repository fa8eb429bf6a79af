"""
Assertions about proxied and non-proxied objects
"""
from .proxy_assert import ProxyAssert, ProxyAssertionError

__all__ = [
    "ProxyAssert",
    "ProxyAssertionError"
]
