"""
Line-oriented terminal I/O
"""
import sys
from typing import Iterable, Optional, TextIO


class Console:
    """Reads input lines and writes output lines"""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def write(self, line: str = "") -> None:
        self.stdout.write(f"{line}\n")
        self.stdout.flush()

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write(line)

    def read_line(self) -> Optional[str]:
        """Next input line without its newline, None at end of input"""
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip('\r\n')
