"""API subclients."""

from .agent import Agent
from .base import APIGroup
from .catalog import Catalog
from .health import Health

__all__ = ["APIGroup", "Agent", "Catalog", "Health"]
