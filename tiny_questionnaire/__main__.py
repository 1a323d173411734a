# -*- coding: utf-8 -*-
import argparse
import json
import logging
import logging.config
import sys

import yaml

from . import config
from .devices import DeviceFailure
from .interactive import Questionnaire
from .questions import BuildError


def main(argv=None):
    args = parse_args(argv)
    survey_conf = config.Config()
    logging.config.dictConfig(survey_conf.log)
    try:
        survey_conf.update_config(args.config)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        logging.error('Unable to read questionnaire config: %s', e)
        return 2
    except BuildError as e:
        logging.error('Invalid questionnaire config: %s', e)
        return 2
    try:
        logging.config.dictConfig(survey_conf.log)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        logging.error('Invalid logging config: %s', e)
        return 2

    questionnaire = Questionnaire(config=survey_conf.messages)
    try:
        survey_conf.build(questionnaire)
    except BuildError as e:
        logging.error('Invalid questionnaire: %s', e)
        return 2

    try:
        results = questionnaire.run()
    except DeviceFailure as e:
        logging.error('Questionnaire aborted: %s', e)
        return 1

    dump_results(results, args.format, args.output)
    return 0


def dump_results(results, fmt, output):
    if fmt == 'yaml':
        text = yaml.safe_dump(results, default_flow_style=False, sort_keys=False)
    else:
        text = json.dumps(results, indent=2) + '\n'
    if output:
        with open(output, 'w', encoding='utf-8') as fp:
            fp.write(text)
    else:
        sys.stdout.write(text)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='tiny_questionnaire')
    parser.add_argument('-c', '--config', default=[], nargs='*',
                        help='Questionnaire definition (YAML or JSON)')
    parser.add_argument('-f', '--format', default='json',
                        choices=['json', 'yaml'],
                        help='Format of the printed answers')
    parser.add_argument('-o', '--output', default=None,
                        help='Write answers to this file instead of stdout')
    args = parser.parse_args(argv)
    return args


if __name__ == '__main__':
    sys.exit(main())
