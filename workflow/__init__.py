"""Workflow data model, SQL helpers, form rendering and template tools."""

__version__ = "0.1.0"