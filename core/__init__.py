"""
Core utilities and shared components for the planner backend.

This package provides components used across every app: the exception
hierarchy and DRF exception handler, pagination helpers, the clock
abstraction and shared viewset mixins.
"""

__version__ = "1.0.0"
