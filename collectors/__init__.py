"""Metric sources sampled on each export cycle"""
from .base import BaseCollector
from .http import HttpRequestCollector
from .system import SystemCollector
from .extensions import UserCollector, AuthCollector, PurchaseCollector

__all__ = [
    'BaseCollector',
    'HttpRequestCollector',
    'SystemCollector',
    'UserCollector',
    'AuthCollector',
    'PurchaseCollector'
]
