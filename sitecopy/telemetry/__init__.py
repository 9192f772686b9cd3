"""Telemetry and observability scaffolds.

This package emits editing-session events for deterministic auditing.
"""

from .logger import SessionLogger

__all__ = ["SessionLogger"]
