"""
Handlers package - exports all handler routers
"""
from . import commands
from . import reports
from . import accounts
from . import slots
from . import clients
from . import smart_add
from . import settings

__all__ = [
    'commands',
    'reports',
    'accounts',
    'slots',
    'clients',
    'smart_add',
    'settings'
]
