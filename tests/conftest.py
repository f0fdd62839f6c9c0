"""
Configuración global para todos los tests del wrapper Stanford NER.

Este archivo se ejecuta automáticamente por pytest y contiene fixtures
compartidas entre todos los tests.
"""

import os
import sys
from typing import List, Optional

import pytest

FAKE_ENGINE = os.path.join(os.path.dirname(__file__), "fake_engine.py")

class FakeEngine:
    """Engine en memoria: registra escrituras y permite emitir salida a mano."""

    def __init__(self):
        self.writes: List[str] = []
        self.handlers = []
        self.exit_listeners = []
        self.running = True
        self.fail_writes: Optional[Exception] = None

    async def write(self, text: str) -> None:
        if self.fail_writes is not None:
            raise self.fail_writes
        self.writes.append(text)

    def subscribe(self, handler) -> None:
        self.handlers.append(handler)

    def unsubscribe(self, handler) -> None:
        if handler in self.handlers:
            self.handlers.remove(handler)

    def add_exit_listener(self, listener) -> None:
        self.exit_listeners.append(listener)

    def emit(self, *lines: str) -> None:
        """Entrega un chunk de salida con las líneas dadas."""
        for handler in list(self.handlers):
            handler(list(lines))

    def exit(self, returncode: int = 0) -> None:
        self.running = False
        for listener in list(self.exit_listeners):
            listener(returncode)

@pytest.fixture
def fake_engine():
    """Engine falso en memoria para tests de la cola."""
    return FakeEngine()

@pytest.fixture
def ner_install(tmp_path):
    """Crea una instalación de Stanford NER mínima (solo los archivos que se validan)."""
    install = tmp_path / "stanford-ner"
    (install / "classifiers").mkdir(parents=True)
    (install / "lib").mkdir()
    (install / "classifiers" / "test.crf.ser.gz").write_bytes(b"")
    (install / "stanford-ner.jar").write_bytes(b"")
    return {
        "install_path": str(install),
        "jar": "stanford-ner.jar",
        "classifier": "test.crf.ser.gz"
    }

@pytest.fixture
def fake_engine_command():
    """Comando que lanza el engine falso en lugar de java."""
    return [sys.executable, "-u", FAKE_ENGINE]

@pytest.fixture
def silent_engine_command():
    """Engine que lee stdin y nunca responde."""
    return [sys.executable, "-c", "import sys; sys.stdin.read()"]

@pytest.fixture
def sample_tagged_lines():
    """Líneas de salida etiquetadas de ejemplo."""
    return [
        "John/PERSON lives/O in/O Paris/LOCATION ./O",
        "New/LOCATION York/LOCATION is/O big/O ./O",
        "Mary/PERSON Smith/PERSON works/O for/O Acme/ORGANIZATION Corp/ORGANIZATION ./O"
    ]
