# -*- coding: utf-8 -*-
import logging
import sys
from typing import Iterable, List, Optional, TextIO


class DeviceFailure(Exception):
    """Raised when a line device can no longer deliver input.

    End of input (Ctrl-D, exhausted script, closed pipe) is the usual cause.
    """
    pass


class LineDevice:
    """Line-oriented input/output used by the interaction engine.

    Subclasses implement `prompt`, `request_line` and `print`. `close` is
    called once per questionnaire, after the last question.
    """

    def __init__(self):
        self.log = logging.getLogger(type(self).__name__)

    def prompt(self, text: str):
        raise NotImplementedError()

    def request_line(self) -> str:
        raise NotImplementedError()

    def print(self, text: str = ''):
        raise NotImplementedError()

    def close(self):
        pass


class TerminalDevice(LineDevice):
    """Line device on top of text streams, the process terminal by default."""

    def __init__(self, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None):
        super().__init__()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def prompt(self, text: str):
        self.stdout.write(text)
        self.stdout.flush()

    def request_line(self) -> str:
        try:
            line = self.stdin.readline()
        except (OSError, ValueError) as e:
            raise DeviceFailure(f'Failed to read input: {e}') from e
        if not line:
            raise DeviceFailure('End of input')
        return line.rstrip('\r\n')

    def print(self, text: str = ''):
        self.stdout.write(f'{text}\n')

    def close(self):
        self.stdout.flush()


class ScriptedDevice(LineDevice):
    """Replays a fixed sequence of input lines.

    :ivar prompts: every prompt rendered, in order
    :ivar output: every message printed, in order
    :ivar closed: number of times the device was released
    """

    def __init__(self, lines: Iterable[str] = ()):
        super().__init__()
        self.lines: List[str] = list(lines)
        self.prompts: List[str] = []
        self.output: List[str] = []
        self.closed = 0

    def feed(self, *lines: str):
        self.lines.extend(lines)

    def prompt(self, text: str):
        self.prompts.append(text)

    def request_line(self) -> str:
        if not self.lines:
            raise DeviceFailure('Input script exhausted')
        line = self.lines.pop(0)
        self.log.debug('Replaying %r', line)
        return line

    def print(self, text: str = ''):
        self.output.append(text)

    def close(self):
        self.closed += 1
