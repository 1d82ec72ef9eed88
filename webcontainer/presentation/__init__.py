"""Presentation module - request entry points inside deployed webapps."""

from .front_controller import FrontControllerFilter, create_servlet_application

__all__ = ["FrontControllerFilter", "create_servlet_application"]
