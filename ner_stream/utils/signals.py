"""
Host-side shutdown wiring for the Stanford NER stream wrapper.

The core never installs signal handlers; the application that owns the
event loop calls ``install_shutdown_handlers`` so the engine process is not
orphaned on Ctrl+C or SIGTERM.
"""

import asyncio
import logging
import signal
from typing import Any, Dict

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = [signal.SIGINT, signal.SIGTERM]

# Marks a signal registered with loop.add_signal_handler
LOOP_HANDLER = object()

def install_shutdown_handlers(loop: asyncio.AbstractEventLoop, ner) -> Dict[signal.Signals, Any]:
    """Stop ``ner`` when the host receives SIGINT or SIGTERM.

    Returns a mapping from each signal to what must be restored on removal:
    ``LOOP_HANDLER`` for signals registered on the loop, otherwise the
    handler that ``signal.signal`` replaced. Where the loop cannot register
    signal handlers (Windows), the process is killed from a plain
    ``signal.signal`` handler instead.
    """
    installed = {}
    for sig in SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, _schedule_exit, loop, ner, sig)
            installed[sig] = LOOP_HANDLER
        except (NotImplementedError, RuntimeError):
            logger.debug(f"[SIGNAL] Loop can't handle {sig.name}, using signal.signal")
            installed[sig] = signal.signal(sig, lambda signum, frame: _kill_now(ner, signal.Signals(signum)))
    return installed

def remove_shutdown_handlers(loop: asyncio.AbstractEventLoop, installed: Dict[signal.Signals, Any]) -> None:
    """Undo ``install_shutdown_handlers``, restoring any replaced handlers."""
    for sig, previous in installed.items():
        if previous is LOOP_HANDLER:
            loop.remove_signal_handler(sig)
        else:
            signal.signal(sig, previous if previous is not None else signal.SIG_DFL)

def _schedule_exit(loop: asyncio.AbstractEventLoop, ner, sig: signal.Signals) -> None:
    logger.info(f"[SIGNAL] Received {sig.name}, stopping engine")
    ner.shutdown_signal = sig.name
    loop.create_task(ner.exit())

def _kill_now(ner, sig: signal.Signals) -> None:
    logger.info(f"[SIGNAL] Received {sig.name}, killing engine")
    ner.shutdown_signal = sig.name
    ner.kill()
