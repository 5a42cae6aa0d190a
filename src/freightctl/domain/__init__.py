"""Domain layer — pricing types, rules, and value objects.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
