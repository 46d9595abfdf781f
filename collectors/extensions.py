"""Extension sources that are not wired into the active source list"""
from typing import Dict, Optional
from .base import BaseCollector


class UserCollector(BaseCollector):
    """Active user gauge"""

    def __init__(self, config=None):
        super().__init__(config, "users", "Active user count")
        self.active_users = 0

    def collect(self) -> Dict[str, int]:
        return {"activeUsers": self.active_users}


class AuthCollector(BaseCollector):
    """Authentication events; reports nothing yet"""

    def __init__(self, config=None):
        super().__init__(config, "auth", "Authentication attempts")

    def collect(self) -> Optional[Dict[str, int]]:
        return None


class PurchaseCollector(BaseCollector):
    """Purchase events; reports nothing yet"""

    def __init__(self, config=None):
        super().__init__(config, "purchases", "Purchase events")

    def collect(self) -> Optional[Dict[str, int]]:
        return None
