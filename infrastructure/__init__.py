"""
Infrastructure Package
======================

Wires repositories and domain services together following the Dependency Inversion Principle.

Modules:
    - container: lazy, cached access to repositories and services

This package enables:
    - Easy testing with in-memory or mock repositories
    - Loose coupling between business logic and persistence
"""
