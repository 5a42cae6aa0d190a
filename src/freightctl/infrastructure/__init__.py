"""Infrastructure layer — tariff tables and their repository.

This layer depends on stdlib, structlog, the domain layer and the
config section models.
It must never import from services, commands, or output.
"""
