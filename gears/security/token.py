"""
Authentication tokens and their storage.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Token:
    """The authenticated user with the names of its roles."""
    user: Any = None
    role_names: List[str] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)

    def get_role_names(self) -> List[str]:
        return list(self.role_names)

    def is_authenticated(self) -> bool:
        return self.user is not None


class TokenStorage:
    """Holds the token of the current thread."""

    def __init__(self, token: Optional[Token] = None):
        self._local = threading.local()
        self._default = token

    def get_token(self) -> Optional[Token]:
        return getattr(self._local, 'token', self._default)

    def set_token(self, token: Optional[Token]) -> None:
        self._local.token = token
