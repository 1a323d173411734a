# -*- coding: utf-8 -*-
import pytest
from tiny_questionnaire import event_bus


@pytest.fixture
def bus():
    return event_bus.EventBus()

def test_empty_bus(bus: event_bus.EventBus):
    for channel in event_bus.QuestionnaireChannels:
        assert channel in bus.listeners
        assert not bus.listeners[channel]

def test_subscription_default_channel(bus: event_bus.EventBus):
    def callback():
        pass
    bus.subscribe(event_bus.QuestionnaireChannels.ON_ASK, callback)
    callbacks = bus.listeners[event_bus.QuestionnaireChannels.ON_ASK]
    assert callback in callbacks

def test_subscription_custom_channel(bus: event_bus.EventBus):
    def callback():
        pass
    bus.subscribe('test-channel', callback)
    callbacks = bus.listeners['test-channel']
    assert callback in callbacks


def test_unsubscribe(bus: event_bus.EventBus):
    def callback():
        return 1

    bus.subscribe('test-channel', callback)
    bus.unsubscribe('test-channel', callback)
    assert bus.broadcast('test-channel') == []


def test_broadcast_unknown_channel(bus: event_bus.EventBus):
    assert bus.broadcast('nobody-listens') == []
    assert bus.broadcast_nothrow('nobody-listens') == []


def test_broadcast_priorities(bus: event_bus.EventBus):
    def callback1():
        return 1

    def callback2():
        return 2

    bus.subscribe('test-channel', callback1, 60)
    bus.subscribe('test-channel', callback2, 40)
    results = bus.broadcast('test-channel')

    assert results == [2, 1]


def test_broadcast_same_priority_keeps_order(bus: event_bus.EventBus):
    def callback1():
        return 1

    def callback2():
        return 2

    bus.subscribe('test-channel', callback1)
    bus.subscribe('test-channel', callback2)
    assert bus.broadcast('test-channel') == [1, 2]


def test_broadcast_exception(bus: event_bus.EventBus):
    def callback1():
        raise ValueError()

    def callback2():
        # Shouldn't be called
        assert False

    bus.subscribe('test-channel', callback1, 40)
    bus.subscribe('test-channel', callback2, 60)
    with pytest.raises(ValueError):
        bus.broadcast('test-channel')


def test_broadcast_nothrow(bus: event_bus.EventBus):
    def callback1():
        raise ValueError()

    def callback2():
        return 1

    bus.subscribe('test-channel', callback1, 40)
    bus.subscribe('test-channel', callback2, 60)
    results = bus.broadcast_nothrow('test-channel')

    error, is_failure_1 = results[0]
    value, is_failure_2 = results[1]
    assert is_failure_1
    assert isinstance(error, ValueError)
    assert value == 1
    assert not is_failure_2
