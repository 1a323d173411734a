# -*- coding: utf-8 -*-
import io

import pytest

from tiny_questionnaire import devices
from tiny_questionnaire import event_bus
from tiny_questionnaire import interactive


@pytest.fixture
def device():
    return devices.ScriptedDevice()


def test_chain_and_run(device: devices.ScriptedDevice):
    device.feed('', 'n')
    results = (
        interactive.Questionnaire(device)
        .say('Shipping')
        .ask('City', 'NYC')
        .yes_no('Confirm', True)
        .run()
    )
    assert results == {'City': 'NYC', 'Confirm': False}
    assert device.output == ['Shipping']


def test_reuse(device: devices.ScriptedDevice):
    questionnaire = interactive.Questionnaire(device)
    device.feed('a', 'b')
    assert questionnaire.ask('First').run() == {'First': 'a'}
    assert not questionnaire.completed
    assert questionnaire.ask('Second').run() == {'Second': 'b'}


def test_subscribe(device: devices.ScriptedDevice):
    answered = []
    questionnaire = interactive.Questionnaire(device).subscribe(
        event_bus.QuestionnaireChannels.ON_ANSWER,
        lambda spec: answered.append(spec.key)
    )
    device.feed('x')
    questionnaire.ask('Name').with_key('name').run()
    assert answered == ['name']


def test_terminal_device():
    stdin = io.StringIO('\nBoston\nParis\nyes\n')
    stdout = io.StringIO()
    questionnaire = interactive.Questionnaire(
        devices.TerminalDevice(stdin, stdout)
    )
    results = (
        questionnaire
        .ask('Name')
        .ask('City')
        .yes_no('Confirm')
        .run()
    )
    assert results == {'Name': 'Boston', 'City': 'Paris', 'Confirm': True}
    assert stdout.getvalue() == (
        'Name: not optional\nName: City: Confirm: (no) '
    )


def test_terminal_device_eof():
    device = devices.TerminalDevice(io.StringIO('Ann\n'), io.StringIO())
    calls = []
    interactive.Questionnaire(device).ask('Name').ask('City').run(
        lambda error, results: calls.append((error, results))
    )
    error, results = calls[0]
    assert isinstance(error, devices.DeviceFailure)
    assert results == {'Name': 'Ann'}


def test_terminal_device_strips_newline():
    device = devices.TerminalDevice(io.StringIO('  value \r\n'), io.StringIO())
    assert device.request_line() == '  value '


def test_scripted_device_exhausted():
    device = devices.ScriptedDevice(['one'])
    assert device.request_line() == 'one'
    with pytest.raises(devices.DeviceFailure):
        device.request_line()
