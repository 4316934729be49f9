"""Authentication values handed to registry clients.

``Authentication`` is the capability a registry client needs: something that
can be rendered into an ``Authorization`` header. ``BasicAuthentication`` is
the username/password variant produced by ``KeychainHelper``.
"""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class Authentication(ABC):
    """Credential material that can be presented to a registry."""

    @abstractmethod
    def token(self) -> str:
        """Return the value for an HTTP ``Authorization`` header."""
        ...


@dataclass(frozen=True)
class BasicAuthentication(Authentication):
    """Username and password pair.

    Example:
        >>> auth = BasicAuthentication(username="alice", password="s3cr3t")
        >>> auth.token()
        'Basic YWxpY2U6czNjcjN0'
    """

    username: str
    password: str = field(repr=False)

    def token(self) -> str:
        pair = f"{self.username}:{self.password}".encode()
        return f"Basic {base64.b64encode(pair).decode('ascii')}"
