"""
Command-line interface parser for the Stanford NER stream wrapper.

Handles argument parsing, validation, and configuration printout.
"""

import argparse
import os
from typing import Any, Dict, List, Optional

from ..config.settings import (
    DEFAULT_INSTALL_PATH, DEFAULT_JAR, DEFAULT_CLASSIFIER, DEFAULT_JAVA_HEAP_MB
)

def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command-line arguments for the NER stream CLI."""
    parser = argparse.ArgumentParser(description="Stanford NER - concurrent stdin/stdout classification")

    # Required arguments
    parser.add_argument("--input", required=True,
                       help="Input file: one text per line, or JSONL with --jsonl")

    # Input/output options
    parser.add_argument("--jsonl", action="store_true",
                       help="Treat the input as JSONL records")
    parser.add_argument("--text_field", default="Texto",
                       help="Field holding the text in JSONL records")
    parser.add_argument("--id_field", default="PMID",
                       help="Field holding the record id in JSONL records")
    parser.add_argument("--out", default="ner_results.jsonl",
                       help="Output file")
    parser.add_argument("--limit", type=int, default=0,
                       help="Limit number of texts (0 = all)")

    # Engine options
    parser.add_argument("--install_path", default=DEFAULT_INSTALL_PATH,
                       help="Stanford NER installation directory")
    parser.add_argument("--jar", default=DEFAULT_JAR,
                       help="Stanford NER jar file name")
    parser.add_argument("--classifier", default=DEFAULT_CLASSIFIER,
                       help="Classifier file name inside classifiers/")
    parser.add_argument("--heap_mb", type=int, default=DEFAULT_JAVA_HEAP_MB,
                       help="Java heap size in MB")

    parser.add_argument("--verbose", action="store_true",
                       help="Enable debug logging")

    return parser.parse_args(argv)

def engine_options_from_args(args) -> Dict[str, Any]:
    """Keyword arguments for the NER constructor."""
    return {
        "install_path": args.install_path,
        "jar": args.jar,
        "classifier": args.classifier,
        "java_heap_size": args.heap_mb
    }

def print_configuration(args, options: Dict[str, Any]):
    """Print the current configuration."""
    print(f"[CONFIG] Install path: {options['installPath']}")
    print(f"[CONFIG] Jar: {options['jar']} | classifier: {options['classifier']}")
    print(f"[CONFIG] Java heap: {options['javaHeapSize']} MB")
    print(f"[CONFIG] Input file: {args.input} ({'jsonl' if args.jsonl else 'plain text'})")
    print(f"[CONFIG] Output file: {args.out}")

def validate_arguments(args) -> bool:
    """Validate command-line arguments."""
    # Check if input file exists
    if not os.path.exists(args.input):
        print(f"[ERROR] Input file not found: {args.input}")
        return False

    # Validate heap size
    if args.heap_mb < 0:
        print(f"[ERROR] Heap size must be non-negative")
        return False

    # Validate limit
    if args.limit < 0:
        print(f"[ERROR] Limit must be non-negative")
        return False

    return True
