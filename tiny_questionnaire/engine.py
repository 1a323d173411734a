# -*- coding: utf-8 -*-
import enum
from typing import Any, Callable, Dict, List, Optional

from . import component
from . import event_bus
from .devices import LineDevice
from .questions import QuestionBuilder, QuestionSpec

NOT_OPTIONAL_MESSAGE = 'not optional'

OnComplete = Callable[[Optional[Exception], Dict[str, Any]], Any]


class Outcome(enum.Enum):
    #: Typed input was accepted
    ANSWERED = 'answered'

    #: Empty input, fallback was used
    FALLBACK = 'fallback'

    #: Validator (or parser) rejected the input, question requeued
    INVALID = 'invalid'

    #: Empty input without fallback or validator, question requeued
    NOT_OPTIONAL = 'not-optional'

    @property
    def accepted(self) -> bool:
        return self in (Outcome.ANSWERED, Outcome.FALLBACK)


class InteractionEngine(component.Component):
    """Drains the pending queue of a builder, one question at a time.

    Exactly one question is in flight: the next prompt is only rendered
    once the current question got a valid or fallback answer. Rejected
    questions go back to the front of the queue and are asked again right
    away.

    :ivar builder: source of the pending queue
    :ivar device: line device questions are asked on
    :ivar completed: answered questions, in completion order
    """

    def __init__(self, builder: QuestionBuilder, device: LineDevice,
                 bus: Optional[event_bus.EventBus] = None,
                 config: Optional[dict] = None):
        super().__init__(bus or event_bus.EventBus(), config or {})
        self.builder = builder
        self.device = device
        self.completed: List[QuestionSpec] = []
        self.not_optional_message = self.config.get(
            'not_optional', NOT_OPTIONAL_MESSAGE
        )

    @property
    def pending(self):
        return self.builder.pending

    @staticmethod
    def render_prompt(spec: QuestionSpec) -> str:
        if spec.has_fallback:
            return f'{spec.prompt}: ({spec.fallback}) '
        return f'{spec.prompt}: '

    def step(self) -> Outcome:
        """Asks the question at the front of the queue and handles the reply.

        Whatever escapes, an unanswered question is put back at the front.

        :raises DeviceFailure: the device could not deliver a line
        """
        spec = self.pending.popleft()
        self.notify(event_bus.QuestionnaireChannels.ON_ASK, spec)
        try:
            if spec.pre_text:
                self.device.print(spec.pre_text)
            self.device.prompt(self.render_prompt(spec))
            raw = self.device.request_line()
            return self.answer(spec, raw)
        except Exception:
            if not spec.answered and (
                    not self.pending or self.pending[0] is not spec):
                self.pending.appendleft(spec)
            raise

    def answer(self, spec: QuestionSpec, raw: str) -> Outcome:
        """Applies a raw reply to a question already taken off the queue."""
        line = raw.strip()
        if not line and spec.has_fallback:
            return self._accept(spec, spec.fallback, line, Outcome.FALLBACK)
        if spec.validator is None:
            if not line:
                return self._reject(spec, line, Outcome.NOT_OPTIONAL)
            return self._accept(spec, line, line, Outcome.ANSWERED)
        try:
            valid = spec.is_valid(line)
        except (TypeError, ValueError) as e:
            self.log_debug('Validator failed on %r for %r: %s', line, spec, e)
            valid = False
        if valid:
            return self._accept(spec, line, line, Outcome.ANSWERED)
        return self._reject(spec, line, Outcome.INVALID)

    def _accept(self, spec: QuestionSpec, text: str, line: str,
                outcome: Outcome) -> Outcome:
        try:
            answer = spec.parse(text)
        except (TypeError, ValueError) as e:
            self.log_debug('Parser rejected %r for %r: %s', text, spec, e)
            return self._reject(spec, line, Outcome.INVALID)
        spec.answer = answer
        spec.answered = True
        self.completed.append(spec)
        self.log_debug('%r answered (%s)', spec, outcome.value)
        self.notify(event_bus.QuestionnaireChannels.ON_ANSWER, spec)
        return outcome

    def _reject(self, spec: QuestionSpec, line: str,
                outcome: Outcome) -> Outcome:
        if outcome is Outcome.NOT_OPTIONAL:
            self.device.print(self.not_optional_message)
        else:
            message = spec.invalid_message(line)
            if message is not None:
                self.device.print(message)
        self.pending.appendleft(spec)
        self.log_debug('%r rejected %r (%s)', spec, line, outcome.value)
        self.notify(event_bus.QuestionnaireChannels.ON_REJECT,
                    spec, line, outcome)
        return outcome

    def results(self) -> Dict[str, Any]:
        """Folds the completed list into the result map, last write wins."""
        return {spec.key: spec.answer for spec in self.completed}

    def run(self, on_complete: Optional[OnComplete] = None) -> Dict[str, Any]:
        """Asks every pending question and delivers the result map.

        `on_complete` receives ``(None, results)`` once the queue is drained.
        On device failure, or any other error raised while asking, it
        receives ``(error, partial_results)``; pending and completed
        questions are then left as they were so the run can be inspected
        or resumed. Without `on_complete` the failure is raised.

        :return: result map (partial one after a device failure)
        """
        self.log_info('Starting questionnaire, %d question(s)', len(self.pending))
        self.notify(event_bus.QuestionnaireChannels.ON_START)
        try:
            while self.pending:
                if not self.step().accepted:
                    self.log_debug('Asking %r again', self.pending[0])
        except Exception as e:
            self.log_error('Questionnaire aborted: %s', e)
            self.device.close()
            self.notify(event_bus.QuestionnaireChannels.ON_FAILURE, e)
            partial = self.results()
            if on_complete is None:
                raise
            on_complete(e, partial)
            return partial

        results = self.results()
        self.builder.clear()
        self.completed = []
        self.device.close()
        self.log_info('Questionnaire complete, %d answer(s)', len(results))
        self.notify(event_bus.QuestionnaireChannels.ON_COMPLETE, results)
        if on_complete is not None:
            on_complete(None, results)
        return results
