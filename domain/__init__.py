"""
Domain layer - Pure business logic without infrastructure dependencies.

This package contains domain models, value objects, and business rules
that are independent of external frameworks, databases, or APIs.
"""
