"""
Draft store adapters.

Keep package import side-effects to a minimum: do not import adapters here.
"""

__all__ = [
    "interface",
    "memory_store",
    "http_store",
]
