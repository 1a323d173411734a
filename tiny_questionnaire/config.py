# -*- coding: utf-8 -*-
import copy
import json
import os

import yaml

from . import questions
from .questions import BuildError, QuestionBuilder


class Config(dict):
    """Declarative questionnaire plus logging settings.

    Example YAML::

        intro: Tell us about your trip
        questions:
          - ask: City
            default: NYC
          - ask: Nights
            pattern: '^[0-9]+$'
            invalid: '%s is not a number'
            parser: int
            key: nights
          - yes_no: Confirm
            default: true
          - choose_one: Seat
            choices: [aisle, window]
            default: 1
    """

    def __init__(self):
        super().__init__()
        self['intro'] = None
        self['questions'] = []
        self['messages'] = DEFAULT_MESSAGES.copy()
        self['log'] = copy.deepcopy(DEFAULT_LOG_CONF)

    def update_config(self, _config):
        if isinstance(_config, list):
            for _conf in _config:
                self.update_config(_conf)
            return
        elif isinstance(_config, str):
            _, ext = os.path.splitext(_config)
            if ext == '.json':
                _config = self._read_json(_config)
            else:
                _config = self._read_yaml(_config)
        elif hasattr(_config, 'read'):
            # JSON is a subset of YAML
            _config = yaml.safe_load(_config)

        if _config is None:
            return
        if not isinstance(_config, dict):
            raise BuildError(
                f'Questionnaire config must be a mapping, '
                f'got {type(_config).__name__}'
            )

        if _config.get('intro'):
            self['intro'] = _config['intro']
        self.questions.extend(_config.get('questions') or [])
        self.messages.update(_config.get('messages') or {})
        self.log.update(_config.get('log') or {})

    @property
    def intro(self):
        return self['intro']

    @property
    def questions(self):
        return self['questions']

    @property
    def messages(self):
        return self['messages']

    @property
    def log(self):
        return self['log']

    def build(self, builder: QuestionBuilder) -> QuestionBuilder:
        """Registers the configured questions on `builder`, in order."""
        if self.intro:
            builder.say(self.intro)
        for entry in self.questions:
            add_question(builder, entry)
        return builder

    def _read_yaml(self, file_name):
        with open(file_name, encoding='utf-8') as fp:
            return yaml.safe_load(fp)

    def _read_json(self, file_name):
        with open(file_name, encoding='utf-8') as fp:
            return json.load(fp)


def add_question(builder: QuestionBuilder, entry: dict):
    if not isinstance(entry, dict):
        raise BuildError(f'Question entry must be a mapping, got {entry!r}')

    kinds = [k for k in QUESTION_TYPES if k in entry]
    if len(kinds) != 1:
        raise BuildError(
            f'Question entry needs exactly one of {", ".join(QUESTION_TYPES)}: '
            f'{entry!r}'
        )
    kind = kinds[0]
    prompt = entry[kind]
    default = entry.get('default')

    if kind == 'ask':
        builder.ask(prompt, default)
    elif kind == 'yes_no':
        builder.yes_no(prompt, default)
    else:
        builder.choose_one(prompt, entry.get('choices'), default)

    if 'pattern' in entry:
        builder.with_validator(entry['pattern'])
    if 'invalid' in entry:
        builder.on_invalid(entry['invalid'])
    if 'parser' in entry:
        parser = PARSER_REGISTRY.get(entry['parser'])
        if parser is None:
            raise BuildError(f'Unknown parser {entry["parser"]!r}')
        builder.with_parser(parser)
    if entry.get('key'):
        builder.with_key(entry['key'])

    say = entry.get('say')
    if isinstance(say, list):
        for message in say:
            builder.say(message)
    elif say:
        builder.say(say)


def split_list(value: str) -> list:
    return [v.strip() for v in value.split(',') if v.strip()]


QUESTION_TYPES = ('ask', 'yes_no', 'choose_one')

PARSER_REGISTRY = {
    'text': questions.identity,
    'int': int,
    'float': float,
    'lower': str.lower,
    'upper': str.upper,
    'list': split_list,
}

DEFAULT_MESSAGES = {
    'not_optional': 'not optional',
}

DEFAULT_LOG_CONF = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'WARNING',
            'formatter': 'simple',
            'stream': 'ext://sys.stderr'
        }
    },
    'root': {
        'level': 'WARNING',
        'handlers': ['console']
    }
}
