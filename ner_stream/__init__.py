"""
Stanford NER Stream Package

Runs a single long-lived Stanford NER process and lets any number of
concurrent callers classify text through it, one request at a time.
"""

__version__ = "1.0.0"
__author__ = "NER Development Team"

from .ner import NER
from .errors import (
    NERError, ConfigurationError, ProcessSpawnError, EngineStateError, EngineExitedError
)
from .core.tagged_parser import parse_line
from .core.tokenizer import count_tokens, count_tagged_tokens

__all__ = [
    'NER',
    'NERError',
    'ConfigurationError',
    'ProcessSpawnError',
    'EngineStateError',
    'EngineExitedError',
    'parse_line',
    'count_tokens',
    'count_tagged_tokens'
]
