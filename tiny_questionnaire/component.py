# -*- coding: utf-8 -*-
import logging

from . import event_bus


class Component:
    """Base for parts of the questionnaire that talk to the event bus.

    Carries the shared bus, the component config and a logger named after
    the class.
    """
    @classmethod
    def name(cls):
        return cls.__name__

    def __init__(self, bus: event_bus.EventBus, config: dict):
        self.bus = bus
        self.config = config
        self._logger = logging.getLogger(self.name())

    def notify(self, channel, *args, **kwargs):
        return self.bus.broadcast_nothrow(channel, *args, **kwargs)

    def log_debug(self, msg, *args, **kwargs):
        self._logger.debug(msg, *args, **kwargs)

    def log_info(self, msg, *args, **kwargs):
        self._logger.info(msg, *args, **kwargs)

    def log_error(self, msg, *args, **kwargs):
        self._logger.error(msg, *args, **kwargs)
