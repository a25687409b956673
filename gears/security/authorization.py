"""
Access decisions: voters combined by a strategy, and the checkers built on them.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from ..errors import InvalidArgumentError
from .token import Token, TokenStorage
from .voter import ACCESS_DENIED, ACCESS_GRANTED, Voter

logger = logging.getLogger(__name__)

STRATEGY_AFFIRMATIVE = 'affirmative'
STRATEGY_CONSENSUS = 'consensus'
STRATEGY_UNANIMOUS = 'unanimous'

STRATEGIES = (STRATEGY_AFFIRMATIVE, STRATEGY_CONSENSUS, STRATEGY_UNANIMOUS)


class AccessDecisionManager:
    """
    Asks every voter and combines the votes.

    - affirmative: granted as soon as one voter grants
    - consensus: granted if more voters grant than deny
    - unanimous: granted only if no voter denies and at least one grants

    When every voter abstains, allow_if_all_abstain decides.
    """

    def __init__(
        self,
        voters: Iterable[Voter],
        strategy: str = STRATEGY_AFFIRMATIVE,
        allow_if_all_abstain: bool = False,
        allow_if_equal_granted_denied: bool = True,
    ):
        if strategy not in STRATEGIES:
            raise InvalidArgumentError(
                f'The strategy "{strategy}" is not supported, use one of: {", ".join(STRATEGIES)}'
            )

        self.voters = list(voters)
        self.strategy = strategy
        self.allow_if_all_abstain = allow_if_all_abstain
        self.allow_if_equal_granted_denied = allow_if_equal_granted_denied

    def decide(self, token: Token, attributes: Sequence[Any], subject: Any = None) -> bool:
        votes = [voter.vote(token, subject, attributes) for voter in self.voters]
        granted = votes.count(ACCESS_GRANTED)
        denied = votes.count(ACCESS_DENIED)

        if self.strategy == STRATEGY_AFFIRMATIVE:
            decision = granted > 0 or (denied == 0 and self.allow_if_all_abstain)
        elif self.strategy == STRATEGY_CONSENSUS:
            if granted > denied:
                decision = True
            elif denied > granted:
                decision = False
            elif granted > 0:
                decision = self.allow_if_equal_granted_denied
            else:
                decision = self.allow_if_all_abstain
        else:
            if denied > 0:
                decision = False
            elif granted > 0:
                decision = True
            else:
                decision = self.allow_if_all_abstain

        logger.debug(
            "Access %s for %s (%d granted, %d denied, strategy %s)",
            "granted" if decision else "denied", list(attributes), granted, denied, self.strategy,
        )
        return decision


class AuthorizationChecker:
    """Checks attributes against the token of the token storage."""

    def __init__(self, token_storage: TokenStorage, access_decision_manager: AccessDecisionManager):
        self.token_storage = token_storage
        self.access_decision_manager = access_decision_manager

    def is_granted(self, attribute: Any, subject: Any = None) -> bool:
        # An anonymous token still lets voters decide
        token = self.token_storage.get_token() or Token()
        return self.access_decision_manager.decide(token, [attribute], subject)


@dataclass(frozen=True)
class ObjectIdentity:
    """Identifies a domain object by its identifier and type."""
    identifier: str
    type: str


@dataclass(frozen=True)
class FieldVote:
    """A vote subject addressing a single field of a domain object."""
    domain_object: Any
    field: str


class ClassScopeAuthorizationChecker:
    """
    Checks permissions on whole types, type fields and single objects.

    Class scope permissions are emulated with an object identity whose
    identifier is the agreed value "class".

        checker.has_access_to_type('VIEW', 'app.Order')
        checker.has_access_to_type_field('EDIT', 'app.Order', 'status')
        checker.has_access_to_object('DELETE', 'app.Order', '42')
    """

    CLASS_SCOPE_OBJECT_IDENTIFIER_VALUE = 'class'

    def __init__(self, checker: AuthorizationChecker):
        self.checker = checker

    def has_access_to_type(self, permission: str, type: str) -> bool:
        return self.checker.is_granted(permission, self._class_identity(type))

    def has_access_to_type_field(self, permission: str, type: str, field: str) -> bool:
        return self.checker.is_granted(permission, FieldVote(self._class_identity(type), field))

    def has_access_to_object(self, permission: str, type: str, identifier: str) -> bool:
        return self.checker.is_granted(permission, ObjectIdentity(str(identifier), type))

    @classmethod
    def _class_identity(cls, type: str) -> ObjectIdentity:
        return ObjectIdentity(cls.CLASS_SCOPE_OBJECT_IDENTIFIER_VALUE, type)

