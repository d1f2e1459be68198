"""
Campaign creation wizard: five-stage draft workflow ending in launch.

Import submodules directly; the blueprint prompts read ``catalog`` while the
controller imports the blueprint models.
"""

__all__ = [
    "catalog",
    "controller",
    "draft",
    "factory",
    "notifier",
    "resume",
    "validators",
]
