"""
Request serialization for the Stanford NER engine.

The engine is stateful and answers one text at a time, so requests are
admitted one by one in arrival order. Everyone else waits in a FIFO queue
keyed by an opaque waiter token until the in-flight request completes.
"""

import asyncio
import logging
import uuid
from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

from .completion import CompletionDetector, FramingStrategy, TokenCountFraming
from .process_manager import EngineProcess
from .tagged_parser import EntityGroup
from .tokenizer import count_tokens
from ..errors import EngineStateError, EngineExitedError

logger = logging.getLogger(__name__)

FramingFactory = Callable[[int], FramingStrategy]

class RequestSerializer:
    """Single-flight admission of classification requests (IDLE <-> BUSY).

    Known liveness risk: there is no timeout. A response whose token count
    never reaches zero keeps the engine busy and stalls every queued request.
    """

    def __init__(self, engine: EngineProcess, framing_factory: FramingFactory = TokenCountFraming):
        self._engine = engine
        self._framing_factory = framing_factory
        self._busy = False
        self._pending: Deque[Tuple[str, asyncio.Future]] = deque()
        self._active: Optional[CompletionDetector] = None
        engine.add_exit_listener(self._on_engine_exit)

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def submit(self, text: str) -> List[EntityGroup]:
        """Classify ``text`` once every request submitted before it has finished."""
        if not text.strip():
            raise ValueError("Text is empty")
        expected = count_tokens(text)
        if not self._engine.running:
            raise EngineStateError("Engine process is not running")

        if self._busy:
            await self._wait_turn()
        else:
            self._busy = True

        return await self._admit(text, expected)

    async def _wait_turn(self) -> None:
        token = uuid.uuid4().hex
        wake = asyncio.get_running_loop().create_future()
        self._pending.append((token, wake))
        logger.debug(f"[QUEUE] Request {token} queued at position {len(self._pending)}")

        try:
            await wake
        except asyncio.CancelledError:
            # Woken but cancelled before admission: hand the turn to the next waiter
            if wake.done() and not wake.cancelled():
                self._wake_next()
            raise

        logger.debug(f"[QUEUE] Request {token} admitted")

    async def _admit(self, text: str, expected: int) -> List[EntityGroup]:
        future = asyncio.get_running_loop().create_future()
        detector = CompletionDetector(self._framing_factory(expected), future, self._release)
        self._active = detector
        self._engine.subscribe(detector)

        try:
            await self._engine.write(text.strip() + "\n")
        except Exception as e:
            logger.error(f"[QUEUE] Write to engine failed: {e}")
            if not future.done():
                future.set_exception(e)
            if self._active is detector:
                self._release(detector)

        return await future

    def _release(self, detector: CompletionDetector) -> None:
        self._engine.unsubscribe(detector)
        if self._active is detector:
            self._active = None
        self._wake_next()

    def _wake_next(self) -> None:
        while self._pending:
            token, wake = self._pending.popleft()
            if wake.done():
                continue
            wake.set_result(token)
            return
        self._busy = False

    def fail_all(self, error: Exception) -> None:
        """Fail the in-flight request and every queued one with ``error``."""
        detector, self._active = self._active, None
        if detector is not None:
            self._engine.unsubscribe(detector)
            if not detector.future.done():
                detector.future.set_exception(error)

        while self._pending:
            _, wake = self._pending.popleft()
            if not wake.done():
                wake.set_exception(error)
        self._busy = False

    def _on_engine_exit(self, returncode: Optional[int]) -> None:
        outstanding = len(self._pending) + (1 if self._active is not None else 0)
        if outstanding:
            logger.error(f"[QUEUE] Engine exited with {outstanding} request(s) outstanding")
            self.fail_all(EngineExitedError(f"Engine exited (code {returncode}) before answering"))
