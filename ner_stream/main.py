#!/usr/bin/env python3
"""
Stanford NER stream CLI.

Classifies every text of an input file through one long-running Stanford NER
process. All texts are submitted at once; the request queue feeds them to the
engine one at a time in input order.
"""

import asyncio
import json
import logging
import time
from collections import defaultdict
from typing import List, Dict, Any

from tqdm.auto import tqdm

from .errors import ConfigurationError, EngineExitedError, NERError
from .ner import NER
from .utils.cli_parser import parse_arguments, validate_arguments, print_configuration, engine_options_from_args
from .utils.signals import install_shutdown_handlers, remove_shutdown_handlers

logger = logging.getLogger(__name__)

def configure_logging(verbose: bool = False):
    """Configure root logging for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s"
    )

def load_documents(input_file: str, jsonl: bool = False, text_field: str = "Texto",
                   id_field: str = "PMID", limit: int = 0) -> List[Dict[str, Any]]:
    """Load texts from a plain text or JSONL file with optional limit."""
    documents = []

    with open(input_file, 'r', encoding='utf-8') as f:
        for line_num, line in enumerate(f):
            if not line.strip():
                continue

            if limit > 0 and len(documents) >= limit:
                break

            if jsonl:
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    print(f"[ERROR] Failed to parse line {line_num+1}: {e}")
                    continue
                if not isinstance(record, dict):
                    print(f"[ERROR] Line {line_num+1} is not a JSON object, skipping")
                    continue
                doc_id = str(record.get(id_field, f"doc_{line_num}"))
                text = record.get(text_field, "")
                if not isinstance(text, str):
                    print(f"[ERROR] Line {line_num+1}: field '{text_field}' is not text, skipping")
                    continue
            else:
                doc_id = f"doc_{line_num}"
                text = line

            # The engine reads one request per line
            text = " ".join(text.split())
            if not text:
                continue

            documents.append({
                "id": doc_id,
                "text": text,
                "line_num": line_num + 1
            })

    return documents

async def classify_documents(ner: NER, documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Submit every document concurrently and collect results in input order."""
    progress = tqdm(total=len(documents), desc="[NER] Classifying", unit="text")

    async def classify_one(doc: Dict[str, Any]) -> Dict[str, Any]:
        t0 = time.time()
        try:
            entities = await ner.get_entities(doc["text"])
            error = None
        except ValueError as e:
            entities, error = [], str(e)
            logger.warning(f"[SKIPPED] {doc['id']} (line {doc['line_num']}): {e}")
        progress.update(1)
        result = {
            "id": doc["id"],
            "text": doc["text"],
            "entities": entities,
            "_latency_sec": round(time.time() - t0, 3)
        }
        if error:
            result["error"] = error
        return result

    try:
        return list(await asyncio.gather(*(classify_one(doc) for doc in documents)))
    finally:
        progress.close()

def save_results(results: List[Dict[str, Any]], output_file: str):
    """Save results to output file."""
    with open(output_file, 'w', encoding='utf-8') as f:
        for result in results:
            f.write(json.dumps(result, ensure_ascii=False) + '\n')

    print(f"[INFO] Results saved to {output_file}")

def summarize_results(results: List[Dict[str, Any]]) -> Dict[str, int]:
    """Count entities per tag across all results."""
    tag_counts = defaultdict(int)
    for r in results:
        for group in r["entities"]:
            for tag, entities in group.items():
                tag_counts[tag] += len(entities)
    return dict(tag_counts)

def print_summary(results: List[Dict[str, Any]]):
    """Print processing summary."""
    print(f"\n[SUMMARY] Processed {len(results)} texts")

    sentences = sum(len(r["entities"]) for r in results)
    errors = sum(1 for r in results if "error" in r)
    print(f"[SUMMARY] Sentences tagged: {sentences}")
    if errors:
        print(f"[SUMMARY] Skipped texts: {errors}")

    print(f"\n[ENTITIES PER TAG]")
    for tag, count in sorted(summarize_results(results).items(), key=lambda x: x[1], reverse=True):
        print(f"  {tag}: {count} entities")

async def run(args) -> int:
    """Start the engine, classify the input, and always stop the engine."""
    ner = NER(**engine_options_from_args(args))
    print_configuration(args, ner.options)

    print(f"[INFO] Loading texts from {args.input}...")
    documents = load_documents(args.input, args.jsonl, args.text_field, args.id_field, args.limit)
    print(f"[INFO] Loaded {len(documents)} texts")

    if not documents:
        print("[ERROR] No valid texts found")
        return 1

    loop = asyncio.get_running_loop()
    await ner.start()
    signals = install_shutdown_handlers(loop, ner)
    try:
        results = await classify_documents(ner, documents)
    except EngineExitedError:
        if ner.shutdown_signal is None:
            raise
        print(f"\n[INTERRUPTED] Processing stopped by {ner.shutdown_signal}")
        return 130
    finally:
        remove_shutdown_handlers(loop, signals)
        await ner.exit()

    save_results(results, args.out)
    print_summary(results)

    print(f"\n[SUCCESS] Processing completed successfully!")
    return 0

def main(argv=None):
    """Main entry point for the NER stream CLI."""
    args = parse_arguments(argv)
    configure_logging(args.verbose)

    if not validate_arguments(args):
        print("[ERROR] Invalid arguments provided")
        return 1

    try:
        return asyncio.run(run(args))

    except ConfigurationError as e:
        print(f"\n[CONFIG ERROR] {e}")
        return 2

    except KeyboardInterrupt:
        print(f"\n[INTERRUPTED] Processing stopped by user")
        return 130

    except NERError as e:
        print(f"\n[ERROR] {e}")
        return 1

if __name__ == "__main__":
    exit(main())
