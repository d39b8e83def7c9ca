"""
API Routers Package
"""

from .recovery import router as recovery_router
from .volume import router as volume_router
from .balance import router as balance_router

__all__ = ['recovery_router', 'volume_router', 'balance_router']
