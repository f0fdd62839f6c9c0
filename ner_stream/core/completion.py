"""
Completion detection for the engine's unframed output stream.

The engine never says when it has finished answering, so each admitted
request gets a framing object that decides, line by line, when the whole
response has arrived. ``TokenCountFraming`` does it by counting tokens.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable, List

from .tagged_parser import EntityGroup, parse_line
from .tokenizer import count_tagged_tokens
from ..errors import EngineStateError

logger = logging.getLogger(__name__)

class FramingStrategy(ABC):
    """Decides where one response ends in the engine's output."""

    @abstractmethod
    def feed(self, line: str) -> bool:
        """Consume one output line; return True once the response is complete."""
        ...

    @property
    @abstractmethod
    def done(self) -> bool:
        ...

    @property
    @abstractmethod
    def result(self) -> List[EntityGroup]:
        ...

class TokenCountFraming(FramingStrategy):
    """Counts tagged tokens down from the number of tokens that were written.

    States: COUNTING(remaining) -> DONE, reached the first time ``remaining``
    drops to zero or below.
    """

    def __init__(self, expected: int):
        self.expected = expected
        self.remaining = expected
        self._result: List[EntityGroup] = []
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    @property
    def result(self) -> List[EntityGroup]:
        return self._result

    def feed(self, line: str) -> bool:
        if self._done:
            raise EngineStateError("Response is already complete")

        self.remaining -= count_tagged_tokens(line)
        self._result.append(parse_line(line))
        if self.remaining <= 0:
            self._done = True
        return self._done

    def __repr__(self) -> str:
        state = "DONE" if self._done else f"COUNTING({self.remaining})"
        return f"TokenCountFraming(expected={self.expected}, state={state})"

class CompletionDetector:
    """Output handler for the single admitted request.

    Feeds each line to the framing object; on completion resolves the
    request's future and then calls ``on_complete`` so the queue can admit
    the next caller. Lines arriving after completion are not attributed to
    this request.
    """

    def __init__(self, framing: FramingStrategy, future: asyncio.Future,
                 on_complete: Callable[["CompletionDetector"], None]):
        self.framing = framing
        self.future = future
        self._on_complete = on_complete
        self.discarded: List[str] = []

    @property
    def done(self) -> bool:
        return self.framing.done

    def __call__(self, lines: List[str]) -> None:
        for index, line in enumerate(lines):
            if self.framing.done:
                self._discard(lines[index:])
                return
            if not line.strip():
                continue
            logger.debug(f"[DETECT] {line}")
            if self.framing.feed(line):
                self._complete()

    def _discard(self, lines: List[str]) -> None:
        trailing = [line for line in lines if line.strip()]
        if trailing:
            logger.warning(f"[DETECT] Discarding {len(trailing)} line(s) received after completion")
            self.discarded.extend(trailing)

    def _complete(self) -> None:
        if not self.future.done():
            self.future.set_result(self.framing.result)
        self._on_complete(self)
