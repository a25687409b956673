"""
Value objects.
"""

from .identifier import Identifier, IdentifierUuid, IdentifierUuidHybrid

__all__ = ['Identifier', 'IdentifierUuid', 'IdentifierUuidHybrid']
