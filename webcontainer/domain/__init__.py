"""
Domain module - Domain Layer

Value objects, errors and ports shared by the container. It must not
depend on the embedded engine or the DI framework.
"""
