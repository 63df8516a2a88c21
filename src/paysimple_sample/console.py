"""
Console I/O used by the workflow.

`Console` is the structural interface; `TerminalConsole` is the stdin/stdout
implementation. The workflow never touches `input` or `print` directly, so
tests can drive it with a scripted console.
"""

from typing import Protocol


class Console(Protocol):
    def write(self, text: str = "") -> None: ...

    def prompt(self, text: str) -> str: ...

    def read_key(self, text: str) -> str: ...


class TerminalConsole:
    """Line-oriented console over stdin/stdout.

    `read_key` reads a whole line and keeps its first character; an empty
    line or end of input yields "".
    """

    def write(self, text: str = "") -> None:
        print(text, flush=True)

    def prompt(self, text: str) -> str:
        try:
            return input(text)
        except EOFError:
            return ""

    def read_key(self, text: str) -> str:
        self.write(text)
        line = self.prompt("")
        return line[:1]
