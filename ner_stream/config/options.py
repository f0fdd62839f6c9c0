"""
Option building and validation for the NER engine.

Turns the constructor arguments into an options dict with defaults set and
checks that the classifier and jar exist before anything is spawned.
"""

import math
import os
from typing import Any, Dict, Optional

from .settings import (
    DEFAULT_INSTALL_PATH, DEFAULT_JAR, DEFAULT_CLASSIFIER, DEFAULT_JAVA_HEAP_MB,
    get_classifier_path, get_jar_path
)
from ..errors import ConfigurationError

REQUIRED_OPTION_KEYS = ["installPath", "jar", "classifier", "javaHeapSize"]

def get_default_options() -> Dict[str, Any]:
    """Get a fresh options dict with every default filled in."""
    return {
        "installPath": DEFAULT_INSTALL_PATH,
        "jar": DEFAULT_JAR,
        "classifier": DEFAULT_CLASSIFIER,
        "javaHeapSize": DEFAULT_JAVA_HEAP_MB
    }

def is_valid_heap_size(value: Any) -> bool:
    """A heap size is accepted only when it is a finite, non-negative number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0

def build_options(install_path: Optional[str] = None, jar: Optional[str] = None,
                  classifier: Optional[str] = None,
                  java_heap_size: Optional[float] = None) -> Dict[str, Any]:
    """Merge caller-supplied options over the defaults.

    Empty strings and invalid heap sizes fall back to the default value,
    string options are trimmed.
    """
    options = get_default_options()

    if install_path and install_path.strip():
        options["installPath"] = install_path.strip()
    if jar and jar.strip():
        options["jar"] = jar.strip()
    if classifier and classifier.strip():
        options["classifier"] = classifier.strip()
    if is_valid_heap_size(java_heap_size):
        options["javaHeapSize"] = int(java_heap_size)

    return options

def check_paths(options: Dict[str, Any]) -> None:
    """Check that the classifier and jar can be resolved on disk.

    Raises:
        ConfigurationError: when either file is missing.
    """
    classifier_path = get_classifier_path(options["installPath"], options["classifier"])
    if not os.path.exists(classifier_path):
        raise ConfigurationError(f"Classifier could not be found at path: {classifier_path}")

    jar_path = get_jar_path(options["installPath"], options["jar"])
    if not os.path.exists(jar_path):
        raise ConfigurationError(f"NER Jar could not be found at path: {jar_path}")

def validate_options(options: Dict[str, Any]) -> bool:
    """Validate that an options dict has all required keys with sane values."""
    for key in REQUIRED_OPTION_KEYS:
        if key not in options:
            return False

    if not isinstance(options["installPath"], str) or not options["installPath"]:
        return False
    if not isinstance(options["jar"], str) or not options["jar"]:
        return False
    if not isinstance(options["classifier"], str) or not options["classifier"]:
        return False
    if not is_valid_heap_size(options["javaHeapSize"]):
        return False

    return True
