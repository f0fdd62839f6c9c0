"""
Process lifecycle management for the Stanford NER engine.

Owns the single Java process: spawns it, writes text to its stdin and
dispatches its stdout to subscribed handlers as complete lines.
"""

import asyncio
import codecs
import logging
from typing import Any, Callable, Dict, List, Optional

from ..config.settings import (
    JAVA_EXECUTABLE, ENGINE_MAIN_CLASS, READ_CHUNK_SIZE, STOP_GRACE_SECONDS,
    OUTPUT_ENCODING, get_classifier_path, get_classpath
)
from ..errors import ProcessSpawnError, EngineStateError, EngineExitedError

logger = logging.getLogger(__name__)

LineHandler = Callable[[List[str]], None]
ExitListener = Callable[[Optional[int]], None]

def build_command(options: Dict[str, Any], java: str = JAVA_EXECUTABLE) -> List[str]:
    """Assemble the java command line that runs the classifier on stdin."""
    install_path = options["installPath"]
    return [
        java,
        f"-mx{options['javaHeapSize']}m",
        "-cp",
        get_classpath(install_path, options["jar"]),
        ENGINE_MAIN_CLASS,
        "-loadClassifier",
        get_classifier_path(install_path, options["classifier"]),
        "-readStdin"
    ]

class LineSplitter:
    """Re-assembles stdout chunks into complete lines.

    A chunk may hold any number of lines and may end in the middle of one;
    the unfinished tail is kept until its newline arrives.
    """

    def __init__(self, encoding: str = OUTPUT_ENCODING):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._tail = ""

    def feed(self, data: bytes) -> List[str]:
        text = self._tail + self._decoder.decode(data)
        *lines, self._tail = text.split("\n")
        return [line.rstrip("\r") for line in lines]

    def flush(self) -> List[str]:
        """Return whatever is left once the stream has ended."""
        text = self._tail + self._decoder.decode(b"", final=True)
        self._tail = ""
        return [text.rstrip("\r")] if text.strip() else []

class EngineProcess:
    """Owner of the engine's process handle.

    There is never more than one live process per instance: ``start()`` may
    only be called once and ``stop()`` is idempotent.
    """

    def __init__(self, options: Dict[str, Any], command: Optional[List[str]] = None):
        self.options = options
        self.command = command or build_command(options)
        self._process: Optional[asyncio.subprocess.Process] = None
        self._handlers: List[LineHandler] = []
        self._exit_listeners: List[ExitListener] = []
        self._reader_task: Optional[asyncio.Task] = None
        self._stderr_task: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def running(self) -> bool:
        return (self._process is not None and not self._stopped
                and self._process.returncode is None)

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process else None

    async def start(self) -> None:
        """Spawn the engine process. Spawn failures are fatal and not retried."""
        if self._process is not None:
            raise EngineStateError("Engine process has already been started")

        logger.info(f"[ENGINE] Starting: {' '.join(self.command)}")
        try:
            self._process = await asyncio.create_subprocess_exec(
                *self.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            raise ProcessSpawnError(f"Could not spawn engine process '{self.command[0]}': {e}") from e

        logger.info(f"[ENGINE] Started with pid {self._process.pid}")
        self._reader_task = asyncio.ensure_future(self._read_stdout())
        self._stderr_task = asyncio.ensure_future(self._drain_stderr())

    async def write(self, text: str) -> None:
        """Write text to the engine's stdin."""
        if not self.running:
            raise EngineStateError("Engine process is not running")

        logger.debug(f"[ENGINE] Writing {len(text)} chars")
        try:
            self._process.stdin.write(text.encode(OUTPUT_ENCODING))
            await self._process.stdin.drain()
        except (BrokenPipeError, ConnectionResetError) as e:
            raise EngineExitedError(f"Engine stdin is closed: {e}") from e

    def subscribe(self, handler: LineHandler) -> None:
        """Register a handler called with the complete lines of each output chunk."""
        self._handlers.append(handler)

    def unsubscribe(self, handler: LineHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def add_exit_listener(self, listener: ExitListener) -> None:
        """Register a callback invoked once the engine's stdout reaches EOF."""
        self._exit_listeners.append(listener)

    def _dispatch(self, lines: List[str]) -> None:
        if not lines:
            return
        for handler in list(self._handlers):
            try:
                handler(lines)
            except Exception:
                logger.exception("[ENGINE] Output handler failed")

    async def _read_stdout(self) -> None:
        splitter = LineSplitter()
        stdout = self._process.stdout
        while True:
            data = await stdout.read(READ_CHUNK_SIZE)
            if not data:
                break
            self._dispatch(splitter.feed(data))
        self._dispatch(splitter.flush())

        returncode = await self._process.wait()
        if self._stopped:
            logger.info(f"[ENGINE] Stopped (exit code {returncode})")
        else:
            logger.warning(f"[ENGINE] Process exited unexpectedly (exit code {returncode})")

        for listener in list(self._exit_listeners):
            listener(returncode)

    async def _drain_stderr(self) -> None:
        # The JVM writes its loading banner to stderr; keep the pipe from filling up
        async for raw in self._process.stderr:
            line = raw.decode(OUTPUT_ENCODING, errors="replace").rstrip()
            if line:
                logger.debug(f"[ENGINE:stderr] {line}")

    async def stop(self) -> None:
        """Terminate the engine process. Safe to call more than once."""
        if self._process is None or self._stopped:
            return
        self._stopped = True

        process = self._process
        if process.returncode is None:
            try:
                process.stdin.close()
                process.terminate()
            except ProcessLookupError:
                pass
            try:
                await asyncio.wait_for(process.wait(), timeout=STOP_GRACE_SECONDS)
            except asyncio.TimeoutError:
                logger.warning(f"[ENGINE] No exit after {STOP_GRACE_SECONDS}s, killing pid {process.pid}")
                process.kill()
                await process.wait()

        tasks = [t for t in (self._reader_task, self._stderr_task) if t is not None]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def kill(self) -> None:
        """Synchronously kill the process, for use outside the event loop."""
        if self._process is not None and self._process.returncode is None:
            self._stopped = True
            try:
                self._process.kill()
            except ProcessLookupError:
                pass
