"""
Campaigns domain package.

Keep import side-effects to a minimum: importing ``app.campaigns.enums`` from the
wizard must not pull SQLAlchemy models in.
"""

__all__ = [
    "enums",
    "models",
    "schemas",
    "repository",
    "router",
    "activation_router",
    "overview_router",
]
