# This file makes the models directory a Python package 
from .service_state import ServiceState
from .pending_query import PendingQuery
from .resolved_verse import ResolvedVerse
from .withdrawal import Withdrawal

__all__ = [
    'ServiceState',
    'PendingQuery',
    'ResolvedVerse',
    'Withdrawal',
]
