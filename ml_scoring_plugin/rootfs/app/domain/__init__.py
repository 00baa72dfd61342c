"""Domain layer for the ML scoring plugin.

This package contains the scoring contract and the dependency resolution
logic, following Domain-Driven Design (DDD) principles.

The domain layer is pure Python with no external dependencies on
scikit-learn, requests, or any infrastructure concerns.
"""
