"""Echo control for the interactive terminal attached to standard input.

This module is POSIX-only: it depends on ``termios``.

Example:
    >>> console = Terminal.current()
    >>> with console.echo_disabled():
    ...     secret = sys.stdin.readline()
"""

import sys
import termios
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

from registry_keychain.exceptions import NoControllingTerminalError, TerminalError

# Index of the local-modes word in a termios attribute list
_LFLAG = 3


class Terminal:
    """A terminal file descriptor and the attributes it had when acquired."""

    def __init__(self, fd: int, attributes: list[Any]) -> None:
        self.fd = fd
        self._original = attributes

    @classmethod
    def current(cls, stream: TextIO | None = None) -> "Terminal":
        """Acquire the terminal behind ``stream``, standard input by default.

        Raises:
            NoControllingTerminalError: If the stream is not a terminal
        """
        try:
            fd = (stream or sys.stdin).fileno()
            attributes = termios.tcgetattr(fd)
        except (AttributeError, ValueError, OSError, termios.error) as e:
            raise NoControllingTerminalError(f"Standard input is not a terminal: {e}") from e
        return cls(fd, attributes)

    def disable_echo(self) -> None:
        """Stop the terminal from echoing typed characters.

        Raises:
            TerminalError: If the terminal attributes cannot be changed
        """
        attributes = list(self._original)
        attributes[_LFLAG] = attributes[_LFLAG] & ~termios.ECHO
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, attributes)
        except termios.error as e:
            raise TerminalError(f"Failed to disable echo: {e}") from e

    def try_reset(self) -> None:
        """Restore the attributes captured at acquisition. Never raises."""
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._original)
        except (termios.error, OSError):
            pass

    @contextmanager
    def echo_disabled(self) -> Iterator["Terminal"]:
        """Disable echo for the duration of the block.

        The reset runs on every exit path, including when ``disable_echo``
        itself fails part-way.
        """
        try:
            self.disable_echo()
            yield self
        finally:
            self.try_reset()
