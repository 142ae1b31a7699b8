# src/adms_gateway/core/__init__.py
"""Core configuration, clock and wire-format primitives."""
