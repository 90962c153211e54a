"""
Module: utils
Description: Package initialization for utility functions.

This package contains shared helpers used throughout the action.

Current utilities:
- logger: Structured logging configuration and helpers
- message: Message resolution and payload building
- actions: Workflow run context and step outputs
"""

__all__ = []
