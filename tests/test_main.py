# -*- coding: utf-8 -*-
import io
import json

import pytest
import yaml

from tiny_questionnaire import __main__ as cli


@pytest.fixture
def survey_file(tmp_path):
    path = tmp_path / 'survey.yaml'
    path.write_text(
        'questions:\n'
        '  - ask: City\n'
        '    default: NYC\n'
        '  - yes_no: Confirm\n'
        '    default: true\n'
    )
    return str(path)


def test_parse_args():
    args = cli.parse_args(['-c', 'a.yaml', 'b.json', '-f', 'yaml'])
    assert args.config == ['a.yaml', 'b.json']
    assert args.format == 'yaml'
    assert args.output is None


def test_main_json(survey_file, tmp_path, monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('\nn\n'))
    output = tmp_path / 'answers.json'
    assert cli.main(['-c', survey_file, '-o', str(output)]) == 0
    assert json.loads(output.read_text()) == {'City': 'NYC', 'Confirm': False}


def test_main_yaml_stdout(survey_file, monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('Paris\ny\n'))
    assert cli.main(['-c', survey_file, '-f', 'yaml']) == 0
    out = capsys.readouterr().out
    assert out.startswith('City: (NYC) Confirm: (yes) ')
    answers = yaml.safe_load(out[len('City: (NYC) Confirm: (yes) '):])
    assert answers == {'City': 'Paris', 'Confirm': True}


def test_main_end_of_input(survey_file, monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('Paris\n'))
    assert cli.main(['-c', survey_file]) == 1


def test_main_missing_config(tmp_path):
    assert cli.main(['-c', str(tmp_path / 'missing.yaml')]) == 2


def test_main_invalid_config(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text('questions:\n  - choose_one: Pick\n    choices: nope\n')
    assert cli.main(['-c', str(path)]) == 2


def test_main_invalid_log_config(tmp_path):
    path = tmp_path / 'bad_log.yaml'
    path.write_text(
        'questions:\n'
        '  - ask: City\n'
        'log:\n'
        '  handlers:\n'
        '    console:\n'
        '      class: no.such.Handler\n'
    )
    assert cli.main(['-c', str(path)]) == 2
