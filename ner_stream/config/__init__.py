"""
Configuration module for the Stanford NER stream wrapper.

Contains installation defaults, launch constants, and option validation.
"""

from .settings import (
    DEFAULT_INSTALL_PATH, DEFAULT_JAR, DEFAULT_CLASSIFIER, DEFAULT_JAVA_HEAP_MB,
    ENGINE_MAIN_CLASS, JAVA_EXECUTABLE
)
from .options import build_options, check_paths, validate_options

__all__ = [
    'DEFAULT_INSTALL_PATH',
    'DEFAULT_JAR',
    'DEFAULT_CLASSIFIER',
    'DEFAULT_JAVA_HEAP_MB',
    'ENGINE_MAIN_CLASS',
    'JAVA_EXECUTABLE',
    'build_options',
    'check_paths',
    'validate_options'
]
