"""
Shared utilities and infrastructure components: settings-aware logging,
the exception hierarchy and async database sessions.
"""
