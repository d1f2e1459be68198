"""
Launch collaborator: starts interview execution for a confirmed campaign.
"""

__all__ = [
    "interface",
    "http_launcher",
    "mock_launcher",
]
