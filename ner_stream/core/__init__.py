"""
Core functionality module for the Stanford NER stream wrapper.

Contains the tokenizer adapter, tagged-stream parser, process manager,
completion detector, and request serializer.
"""

from .tokenizer import count_tokens, count_tagged_tokens, unescape_token, ESCAPED_TOKENS
from .tagged_parser import parse_line, parse_lines, split_tagged_tokens
from .process_manager import EngineProcess, LineSplitter, build_command
from .completion import CompletionDetector, FramingStrategy, TokenCountFraming
from .serializer import RequestSerializer

__all__ = [
    'count_tokens',
    'count_tagged_tokens',
    'unescape_token',
    'ESCAPED_TOKENS',
    'parse_line',
    'parse_lines',
    'split_tagged_tokens',
    'EngineProcess',
    'LineSplitter',
    'build_command',
    'CompletionDetector',
    'FramingStrategy',
    'TokenCountFraming',
    'RequestSerializer'
]
