# -*- coding: utf-8 -*-
import enum
import logging
import operator


class QuestionnaireChannels(enum.Enum):
    """Events published while a questionnaire is running"""

    #: Fired when a run starts draining the pending queue
    ON_START = 'on-start'

    #: Fired right before a question is prompted
    ON_ASK = 'on-ask'

    #: Fired when a question receives a valid or fallback answer
    ON_ANSWER = 'on-answer'

    #: Fired when an answer is rejected and the question is requeued
    ON_REJECT = 'on-reject'

    #: Fired once the pending queue is empty and results are folded
    ON_COMPLETE = 'on-complete'

    #: Fired when the line device fails mid-run
    ON_FAILURE = 'on-failure'


class EventBus:
    """Event bus for observing a questionnaire run.

    Listeners are called synchronously, lowest priority value first. For
    listeners sharing a priority, subscription order is kept.

    :ivar listeners: mapping channel -> listeners
    :ivar log: event bus logger
    """

    @classmethod
    def name(cls):
        return cls.__name__

    def __init__(self):
        self.listeners = {channel: [] for channel in QuestionnaireChannels}
        self._priorities = {}
        self.log = logging.getLogger(self.name())

    def subscribe(self, channel, callback, priority=50):
        """Subscribes a listener to the event channel

        :param channel: event channel
        :type channel: QuestionnaireChannels or str
        :param callback: callback that will be called when event is fired
        :type callback: function
        :param priority: subscriber priority, defaults to 50
        :type priority: int, optional
        """
        callbacks = self.listeners.setdefault(channel, [])
        if callback not in callbacks:
            callbacks.append(callback)

        if priority is None:
            priority = getattr(callback, 'priority', 50)
        self._priorities[(channel, callback)] = priority

    def unsubscribe(self, channel, callback):
        listeners = self.listeners.get(channel)
        if listeners and callback in listeners:
            listeners.remove(callback)
            del self._priorities[(channel, callback)]

    def broadcast(self, channel, *args, **kwargs):
        """Broadcast the event to all listeners on the channel.

        :return: list of results from all listeners
        :rtype: list
        """
        return [
            listener(*args, **kwargs)
            for listener in self._sort_listeners(channel)
        ]

    def broadcast_nothrow(self, channel, *args, **kwargs):
        """Broadcast the event, collecting listener errors instead of raising.

        :return: list of tuples ``(result_or_exception, failed)``
        :rtype: list
        """
        results = []
        for listener in self._sort_listeners(channel):
            try:
                result = listener(*args, **kwargs)
            except Exception as e:
                self.log.exception('Listener %r failed on %s', listener, channel)
                results.append((e, True))
            else:
                results.append((result, False))
        return results

    def _sort_listeners(self, channel):
        listeners = self.listeners.get(channel, [])
        unsorted = (
            (self._priorities[(channel, l)], i, l)
            for i, l in enumerate(listeners)
        )
        return [l for _, _, l in sorted(unsorted, key=operator.itemgetter(0, 1))]
