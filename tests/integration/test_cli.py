"""
Tests de integración para la CLI (main.py) con el engine falso.
"""

import asyncio
import json
import signal
from unittest.mock import patch

import pytest
from ner_stream.main import main, load_documents, save_results, summarize_results, classify_documents
from ner_stream.utils.signals import _schedule_exit

@pytest.fixture
def texts_file(tmp_path):
    """Archivo de texto plano, una petición por línea."""
    path = tmp_path / "texts.txt"
    path.write_text(
        "John lives in Paris .\n"
        "\n"
        "Mary visits London .\n"
        "Acme Corp hired John Smith .\n",
        encoding="utf-8"
    )
    return path

@pytest.fixture
def jsonl_file(tmp_path):
    """Archivo JSONL con id y texto."""
    path = tmp_path / "docs.jsonl"
    records = [
        {"PMID": "d1", "Texto": "John lives in\nParis ."},
        {"PMID": "d2", "Texto": "   "},
        {"PMID": "d3", "Texto": "Mary visits London ."}
    ]
    path.write_text("\n".join(json.dumps(r) for r in records) + "\nnot json\n", encoding="utf-8")
    return path

def _engine_args(ner_install):
    return [
        "--install_path", ner_install["install_path"],
        "--jar", ner_install["jar"],
        "--classifier", ner_install["classifier"]
    ]

class TestLoadDocuments:
    """Tests para la carga de textos."""

    def test_plain_text(self, texts_file):
        """Test una línea por texto, líneas vacías ignoradas."""
        documents = load_documents(str(texts_file))
        assert [d["text"] for d in documents] == [
            "John lives in Paris .", "Mary visits London .", "Acme Corp hired John Smith ."
        ]
        assert documents[1]["line_num"] == 3

    def test_limit(self, texts_file):
        """Test límite de textos."""
        assert len(load_documents(str(texts_file), limit=2)) == 2

    def test_jsonl(self, jsonl_file):
        """Test JSONL: saltos de línea colapsados, vacíos y líneas inválidas saltados."""
        documents = load_documents(str(jsonl_file), jsonl=True)
        assert [d["id"] for d in documents] == ["d1", "d3"]
        assert documents[0]["text"] == "John lives in Paris ."

    def test_jsonl_non_string_text_skipped(self, tmp_path):
        """Test JSONL con texto que no es cadena o línea que no es objeto: se salta sin fallar."""
        path = tmp_path / "docs.jsonl"
        records = [
            {"PMID": "n1", "Texto": 42},
            {"PMID": "n2", "Texto": None},
            {"PMID": "n3", "Texto": ["John"]},
            {"PMID": "n4", "Texto": "John lives in Paris ."}
        ]
        path.write_text("\n".join(json.dumps(r) for r in records) + "\n[1, 2]\n", encoding="utf-8")

        documents = load_documents(str(path), jsonl=True)
        assert [d["id"] for d in documents] == ["n4"]

class TestResults:
    """Tests para el guardado y resumen de resultados."""

    def test_save_results(self, tmp_path):
        """Test guardado JSONL."""
        out = tmp_path / "out.jsonl"
        save_results([{"id": "a", "text": "x", "entities": [{"PERSON": ["John"]}]}], str(out))
        saved = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
        assert saved[0]["entities"] == [{"PERSON": ["John"]}]

    def test_summarize_results(self):
        """Test conteo de entidades por etiqueta."""
        results = [
            {"entities": [{"PERSON": ["John", "Mary"]}, {"LOCATION": ["Paris"]}]},
            {"entities": [{"PERSON": ["Smith"]}]}
        ]
        assert summarize_results(results) == {"PERSON": 3, "LOCATION": 1}

class TestMain:
    """Tests de la CLI completa."""

    def test_main_plain_text(self, texts_file, tmp_path, ner_install, fake_engine_command):
        """Test ejecución completa con texto plano."""
        out = tmp_path / "results.jsonl"
        with patch("ner_stream.core.process_manager.build_command", return_value=fake_engine_command):
            code = main(["--input", str(texts_file), "--out", str(out)] + _engine_args(ner_install))

        assert code == 0
        results = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
        assert [r["entities"] for r in results] == [
            [{"PERSON": ["John"], "LOCATION": ["Paris"]}],
            [{"PERSON": ["Mary"], "LOCATION": ["London"]}],
            [{"ORGANIZATION": ["Acme Corp"], "PERSON": ["John Smith"]}]
        ]

    def test_main_text_without_countable_tokens(self, tmp_path, ner_install, fake_engine_command):
        """Test que un texto sólo con tokens de un carácter se clasifica y no bloquea."""
        input_file = tmp_path / "texts.txt"
        input_file.write_text("I .\nJohn lives in Paris .\n", encoding="utf-8")
        out = tmp_path / "results.jsonl"
        with patch("ner_stream.core.process_manager.build_command", return_value=fake_engine_command):
            code = main(["--input", str(input_file), "--out", str(out)] + _engine_args(ner_install))

        assert code == 0
        results = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
        assert results[0]["entities"] == [{}]
        assert "error" not in results[0]
        assert results[1]["entities"] == [{"PERSON": ["John"], "LOCATION": ["Paris"]}]

    def test_main_interrupted_by_signal(self, texts_file, tmp_path, ner_install, silent_engine_command):
        """Test que SIGINT durante la clasificación termina con código 130."""
        async def classify_then_interrupt(ner, documents):
            loop = asyncio.get_running_loop()
            loop.call_later(0.2, _schedule_exit, loop, ner, signal.SIGINT)
            return await classify_documents(ner, documents)

        out = tmp_path / "results.jsonl"
        with patch("ner_stream.core.process_manager.build_command", return_value=silent_engine_command), \
             patch("ner_stream.main.classify_documents", new=classify_then_interrupt):
            code = main(["--input", str(texts_file), "--out", str(out)] + _engine_args(ner_install))

        assert code == 130
        assert not out.exists()

    def test_main_configuration_error(self, texts_file, tmp_path):
        """Test código de salida con instalación inexistente."""
        code = main(["--input", str(texts_file), "--install_path", str(tmp_path / "missing")])
        assert code == 2

    def test_main_missing_input(self, tmp_path):
        """Test archivo de entrada inexistente."""
        assert main(["--input", str(tmp_path / "missing.txt")]) == 1
