"""Console I/O used by the prompts and the narrator."""

from collections import deque
from typing import Iterable


class Console:
    """Reads lines from stdin and writes lines to stdout."""

    def input(self, prompt: str) -> str:
        """
        Ask for one line of input.

        Raises:
            EOFError: When input is exhausted.
        """
        return input(prompt)

    def print(self, message: str = "") -> None:
        print(message)


class ScriptedConsole(Console):
    """
    A console that answers prompts from a fixed list and records everything.

    Running out of answers behaves like end of input.
    """

    def __init__(self, responses: Iterable[str] = ()) -> None:
        self.responses = deque(responses)
        self.prompts: list[str] = []
        self.lines: list[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise EOFError
        return self.responses.popleft()

    def print(self, message: str = "") -> None:
        self.lines.append(message)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)
