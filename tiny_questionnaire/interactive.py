# -*- coding: utf-8 -*-
from typing import Any, Dict, Optional

from . import event_bus
from .devices import LineDevice, TerminalDevice
from .engine import InteractionEngine, OnComplete
from .questions import QuestionBuilder


class Questionnaire(QuestionBuilder):
    """Declare questions, then run them on a line device.

    Example::

        answers = (
            Questionnaire()
            .say('Shipping details')
            .ask('City', 'NYC')
            .yes_no('Confirm', True)
            .run()
        )

    After a successful run the questionnaire is empty again and can be used
    to declare and run another set of questions.
    """

    def __init__(self, device: Optional[LineDevice] = None,
                 bus: Optional[event_bus.EventBus] = None,
                 config: Optional[dict] = None):
        device = device if device is not None else TerminalDevice()
        super().__init__(device)
        self.bus = bus if bus is not None else event_bus.EventBus()
        self.engine = InteractionEngine(self, device, self.bus, config)

    @property
    def completed(self):
        return self.engine.completed

    def subscribe(self, channel, callback, priority=50):
        self.bus.subscribe(channel, callback, priority)
        return self

    def run(self, on_complete: Optional[OnComplete] = None) -> Dict[str, Any]:
        return self.engine.run(on_complete)
