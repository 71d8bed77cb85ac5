"""Domain layer — handles and checked types.

This layer depends only on stdlib and pydantic.
It must never import from config.
"""
