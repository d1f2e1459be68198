"""
Blueprint generation: turns finalized wizard data into a system prompt and a
duration estimate.
"""

__all__ = [
    "interface",
    "models",
    "prompts",
    "response_parser",
    "template_generator",
    "openai_generator",
    "http_generator",
    "config",
    "factory",
    "router",
]
