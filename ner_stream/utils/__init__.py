"""
Utility modules for the Stanford NER stream wrapper.

Contains CLI parsing and host shutdown signal wiring.
"""

from .cli_parser import parse_arguments, validate_arguments, engine_options_from_args
from .signals import install_shutdown_handlers, remove_shutdown_handlers

__all__ = [
    'parse_arguments',
    'validate_arguments',
    'engine_options_from_args',
    'install_shutdown_handlers',
    'remove_shutdown_handlers'
]
