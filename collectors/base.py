"""Base collector for metric sources"""
from abc import ABC, abstractmethod
from typing import Dict, Optional
from metrics.models import Number


class BaseCollector(ABC):
    """Base class for all metric sources that are sampled on each export cycle

    A source handed to the registry is either a ``BaseCollector`` or an
    already-flat mapping of key to value.
    """

    def __init__(self, config=None, name: str = "", help_text: str = ""):
        self.config = config
        self._name = name
        self._help_text = help_text

    @abstractmethod
    def collect(self) -> Optional[Dict[str, Number]]:
        """Return a snapshot of key to value, or None when there is nothing to report"""
        pass

    @property
    def name(self) -> str:
        return self._name

    @property
    def help_text(self) -> str:
        return self._help_text or f"{self.name} metrics collector"

    def is_enabled(self) -> bool:
        """Check if this collector is enabled"""
        if hasattr(self.config, 'enabled_sources'):
            return self.name in self.config.enabled_sources
        return True
