"""
Service layer for gitopolis.

Contains logic that orchestrates domain objects and infrastructure:
- ExecService: run a command across repositories

Services are the primary API for commands to use.
"""

from .exec_service import ExecService

__all__ = [
    'ExecService',
]
