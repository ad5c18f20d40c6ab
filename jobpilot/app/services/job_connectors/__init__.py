"""
Job board connectors - search external aggregators and normalize results.
"""
from .adzuna import AdzunaConnector
from .base import BaseJobConnector
from .manager import ConnectorManager

__all__ = [
    "AdzunaConnector",
    "BaseJobConnector",
    "ConnectorManager",
]
