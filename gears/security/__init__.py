"""
Security package: symmetric encryption, voters, access decisions and
class scope authorization checks.
"""

from .crypto import Crypto
from .token import Token, TokenStorage
from .voter import (
    ACCESS_GRANTED, ACCESS_ABSTAIN, ACCESS_DENIED, Voter, RoleVoter, SuperUserRoleVoter
)
from .authorization import (
    STRATEGY_AFFIRMATIVE, STRATEGY_CONSENSUS, STRATEGY_UNANIMOUS,
    AccessDecisionManager, AuthorizationChecker,
    ObjectIdentity, FieldVote, ClassScopeAuthorizationChecker,
)

__all__ = [
    'Crypto', 'Token', 'TokenStorage',
    'ACCESS_GRANTED', 'ACCESS_ABSTAIN', 'ACCESS_DENIED',
    'Voter', 'RoleVoter', 'SuperUserRoleVoter',
    'STRATEGY_AFFIRMATIVE', 'STRATEGY_CONSENSUS', 'STRATEGY_UNANIMOUS',
    'AccessDecisionManager', 'AuthorizationChecker',
    'ObjectIdentity', 'FieldVote', 'ClassScopeAuthorizationChecker',
]
