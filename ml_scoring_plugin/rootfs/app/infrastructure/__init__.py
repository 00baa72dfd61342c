"""Infrastructure layer for the ML scoring plugin.

This package contains implementations of domain interfaces
that interact with external systems (scikit-learn, PyPI, pip, file storage).
"""
