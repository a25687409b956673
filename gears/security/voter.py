"""
Voters decide on single attributes (roles, permissions) for a token.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from .token import Token

ACCESS_GRANTED = 1
ACCESS_ABSTAIN = 0
ACCESS_DENIED = -1


class Voter(ABC):
    """Votes on access to a subject."""

    ACCESS_GRANTED = ACCESS_GRANTED
    ACCESS_ABSTAIN = ACCESS_ABSTAIN
    ACCESS_DENIED = ACCESS_DENIED

    @abstractmethod
    def vote(self, token: Token, subject: Any, attributes: Sequence[Any]) -> int:
        """Return ACCESS_GRANTED, ACCESS_ABSTAIN or ACCESS_DENIED."""


class RoleVoter(Voter):
    """
    Votes on attributes starting with the role prefix.

    Grants when the token has one of the roles, denies when it has none,
    abstains when no attribute is a role.
    """

    def __init__(self, prefix: str = 'ROLE_'):
        self.prefix = prefix

    def vote(self, token: Token, subject: Any, attributes: Sequence[Any]) -> int:
        result = ACCESS_ABSTAIN
        roles = token.get_role_names()

        for attribute in attributes:
            if not isinstance(attribute, str) or not attribute.startswith(self.prefix):
                continue

            result = ACCESS_DENIED
            if attribute in roles:
                return ACCESS_GRANTED

        return result


class SuperUserRoleVoter(Voter):
    """
    Grants everything to tokens with ROLE_SUPER_USER, abstains otherwise.

        checker.is_granted(SuperUserRoleVoter.ROLE_SUPER_USER)
    """

    ROLE_SUPER_USER = 'ROLE_SUPER_USER'

    def vote(self, token: Token, subject: Any, attributes: Sequence[Any]) -> int:
        return ACCESS_GRANTED if self.has_super_user_role(token) else ACCESS_ABSTAIN

    def has_super_user_role(self, token: Token) -> bool:
        return self.ROLE_SUPER_USER in token.get_role_names()
