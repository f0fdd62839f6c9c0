"""
Stanford NER wrapper exposing a concurrency-safe classification interface.
"""

import logging
from typing import Any, Dict, List, Optional

from .config.options import build_options, check_paths
from .core.process_manager import EngineProcess
from .core.serializer import RequestSerializer
from .core.tagged_parser import EntityGroup

logger = logging.getLogger(__name__)

class NER:
    """Wraps the Stanford NER and provides interfaces for classification.

    Paths are checked in the constructor, so a missing classifier or jar
    raises ``ConfigurationError`` before any process is spawned. Call
    ``start()`` (or use ``async with``) before classifying.

    Args:
        install_path: Path to the Stanford NER directory.
            Default: ./stanford-ner-2017-06-09
        jar: The jar file for Stanford NER. Default: stanford-ner.jar
        classifier: The classifier to use, looked up in ``classifiers/``.
            Default: english.muc.7class.distsim.crf.ser.gz
        java_heap_size: Memory (in MB) for the Java heap. Default: 1500
        command: Replaces the java command line (used by tests and custom launchers).
    """

    def __init__(self, install_path: Optional[str] = None, jar: Optional[str] = None,
                 classifier: Optional[str] = None, java_heap_size: Optional[float] = None,
                 command: Optional[List[str]] = None):
        self.options: Dict[str, Any] = build_options(install_path, jar, classifier, java_heap_size)
        check_paths(self.options)

        self._engine = EngineProcess(self.options, command=command)
        self._serializer = RequestSerializer(self._engine)
        # Name of the host signal that asked for shutdown, set by utils.signals
        self.shutdown_signal: Optional[str] = None

    @property
    def is_busy(self) -> bool:
        """Whether an entity extraction is currently in flight."""
        return self._serializer.busy

    @property
    def queue_length(self) -> int:
        return self._serializer.pending

    @property
    def running(self) -> bool:
        return self._engine.running

    async def start(self) -> None:
        """Spawn the engine process."""
        await self._engine.start()

    async def get_entities(self, text: str) -> List[EntityGroup]:
        """Returns one entry per sentence mapping each entity tag to the entities found.

        Args:
            text: The text to be processed. Should not contain new line characters.
        """
        return await self._serializer.submit(text)

    async def exit(self) -> None:
        """Kills the Java process."""
        await self._engine.stop()

    def kill(self) -> None:
        """Kill the Java process without awaiting it (signal handler context)."""
        self._engine.kill()

    async def __aenter__(self) -> "NER":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.exit()
