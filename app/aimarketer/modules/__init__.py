"""
Feature modules live under this package.

Each module owns its routes/templates/models and reuses the platform
primitives (auth session, role gate, DB session).
"""
