# -*- coding: utf-8 -*-
import collections
import collections.abc
import re
from typing import Any, Callable, Deque, List, Optional, Sequence

from . import devices

YES_NO_PATTERN = re.compile(r'^[yn][eo]?[so]*$', re.IGNORECASE)
YES_PATTERN = re.compile(r'^y', re.IGNORECASE)
DEFAULT_INVALID_MESSAGE = 'invalid input'
PLACEHOLDER_PATTERN = re.compile(r'%[s%]')


class BuildError(ValueError):
    """Raised when a questionnaire is declared with invalid arguments.

    Always raised at build time, never while the questionnaire is running.
    """
    pass


def identity(value: str) -> str:
    return value


class QuestionSpec:
    """Free-form question.

    :ivar prompt: text displayed to the user
    :ivar validator: predicate over the trimmed raw input, or `None`
    :ivar invalid: callable producing feedback for rejected input, or `None`
    :ivar parser: transforms accepted raw text into the stored answer
    :ivar result_key: key overriding `prompt` in the result map
    :ivar answer: parsed answer, meaningful once `answered` is set
    """

    def __init__(self, prompt: str, fallback=None, validator=None):
        self.prompt = prompt
        self.validator = None
        self.invalid = None
        self.parser = identity
        self.result_key = None
        self.answer = None
        self.answered = False
        self._pre_text = []
        self._fallback = None
        self.fallback = fallback
        if validator is not None:
            self.validator = make_validator(validator)

    @property
    def fallback(self) -> Optional[str]:
        return self._fallback

    @fallback.setter
    def fallback(self, value):
        if value is None or value == '':
            self._fallback = None
        else:
            self._fallback = self.normalize_fallback(value)

    @property
    def has_fallback(self) -> bool:
        return self._fallback is not None

    def normalize_fallback(self, value) -> Optional[str]:
        return str(value)

    @property
    def key(self) -> str:
        if self.result_key:
            return self.result_key
        return self.prompt

    @property
    def pre_text(self) -> str:
        return '\n'.join(self._pre_text)

    def add_pre_text(self, message: str):
        self._pre_text.append(message)

    def is_valid(self, raw: str) -> bool:
        return bool(self.validator(raw))

    def invalid_message(self, raw: str) -> Optional[str]:
        if self.invalid is None:
            return None
        return self.invalid(raw)

    def parse(self, raw: str):
        return self.parser(raw)

    def __repr__(self):
        return f'{type(self).__name__}({self.prompt!r})'


class YesNoSpec(QuestionSpec):
    """Yes/no question, answered with a boolean.

    The fallback is always set: anything truthy becomes "yes", anything else
    (including no fallback at all) becomes "no".
    """

    def __init__(self, prompt: str, fallback: bool = False):
        super().__init__(prompt, 'yes' if fallback else 'no', YES_NO_PATTERN)
        self.parser = parse_yes_no

    @QuestionSpec.fallback.setter
    def fallback(self, value):
        self._fallback = self.normalize_fallback(value)

    def normalize_fallback(self, value) -> str:
        if isinstance(value, str):
            return 'yes' if YES_PATTERN.match(value.strip()) else 'no'
        return 'yes' if value else 'no'


class ChoiceSpec(QuestionSpec):
    """Question accepting exactly one of a fixed list of choices."""

    def __init__(self, prompt: str, choices: Sequence[str], fallback=None):
        if (isinstance(choices, (str, bytes))
                or not isinstance(choices, collections.abc.Sequence)):
            raise BuildError(
                'Invalid input: `choices` must be a sequence of strings'
            )
        if not choices:
            raise BuildError('Invalid input: `choices` must not be empty')
        if not all(isinstance(c, str) for c in choices):
            raise BuildError(
                'Invalid input: every element of `choices` must be a string'
            )
        self.choices = list(choices)
        super().__init__(prompt, fallback, self.is_choice)

    def is_choice(self, raw: str) -> bool:
        return raw.strip() in self.choices

    def normalize_fallback(self, value) -> str:
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value < len(self.choices):
                return self.choices[value]
        elif isinstance(value, str) and value in self.choices:
            return value
        return self.choices[0]


def parse_yes_no(raw: str) -> bool:
    return bool(YES_PATTERN.match(raw))


def make_validator(validator) -> Callable[[str], bool]:
    if isinstance(validator, str):
        try:
            validator = re.compile(validator)
        except re.error as e:
            raise BuildError(f'Invalid validation pattern {validator!r}: {e}')
    if isinstance(validator, re.Pattern):
        pattern = validator
        return lambda raw: pattern.search(raw) is not None
    if callable(validator):
        return validator
    raise BuildError(
        f'Validator must be callable or a pattern, got {type(validator).__name__}'
    )


def make_invalid_message(message) -> Callable[[str], str]:
    if callable(message):
        return message
    if not isinstance(message, str):
        raise BuildError(
            f'Invalid message must be a string or callable, '
            f'got {type(message).__name__}'
        )
    template = message or DEFAULT_INVALID_MESSAGE
    if '%' not in template:
        return lambda raw: template
    return lambda raw: format_invalid(template, raw)


def format_invalid(template: str, raw: str) -> str:
    """Puts `raw` in place of the first `%s`; `%%` is a literal percent.

    Any other `%` is kept as written.
    """
    used = []

    def substitute(match):
        if match.group(0) == '%%':
            return '%'
        if used:
            return match.group(0)
        used.append(match)
        return raw

    return PLACEHOLDER_PATTERN.sub(substitute, template)


class QuestionBuilder:
    """Accumulates question specs in the order they will be asked.

    Every method returns the builder, so declarations chain::

        builder.ask('Name').with_key('name').yes_no('Confirm', True)

    Decorating methods (`with_default`, `with_key`, ...) apply to the most
    recently added question and do nothing while the queue is empty.

    :ivar pending: questions waiting to be asked, front first
    :ivar device: line device used by `say` before any question exists,
                  the terminal by default
    """

    def __init__(self, device=None):
        self.device = device if device is not None else devices.TerminalDevice()
        self.pending: Deque[QuestionSpec] = collections.deque()
        self._last: Optional[QuestionSpec] = None

    def add(self, spec: QuestionSpec) -> 'QuestionBuilder':
        self.pending.append(spec)
        self._last = spec
        return self

    def ask(self, prompt: str, fallback=None, validator=None):
        return self.add(QuestionSpec(prompt, fallback, validator))

    def yes_no(self, prompt: str, fallback: bool = False):
        return self.add(YesNoSpec(prompt, fallback))

    def choose_one(self, prompt: str, choices: Sequence[str], fallback=None):
        return self.add(ChoiceSpec(prompt, choices, fallback))

    def with_default(self, fallback):
        if self.last is not None:
            self.last.fallback = fallback
        return self

    def with_validator(self, validator):
        validator = make_validator(validator)
        if self.last is not None:
            self.last.validator = validator
        return self

    def with_parser(self, parser: Callable[[str], Any]):
        if not callable(parser):
            raise BuildError('Parser must be callable')
        if self.last is not None:
            self.last.parser = parser
        return self

    def on_invalid(self, message):
        invalid = make_invalid_message(message)
        if self.last is not None:
            self.last.invalid = invalid
        return self

    def with_key(self, name: str):
        if self.last is not None:
            self.last.result_key = name
        return self

    def say(self, message: str = ''):
        if self.last is not None:
            self.last.add_pre_text(message)
        else:
            self.device.print(message)
        return self

    @property
    def last(self) -> Optional[QuestionSpec]:
        """Most recently added question, until it gets answered."""
        if self._last is not None and not self._last.answered:
            return self._last
        return None

    def specs(self) -> List[QuestionSpec]:
        return list(self.pending)

    def clear(self):
        self.pending.clear()
        self._last = None
