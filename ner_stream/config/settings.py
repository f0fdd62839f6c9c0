"""
General system settings and constants for the Stanford NER stream wrapper.

Contains installation defaults, engine launch constants, and path helpers.
"""

import os

# Installation defaults (overridable through the environment)
DEFAULT_INSTALL_PATH = os.environ.get(
    "NER_INSTALL_PATH",
    os.path.join(os.getcwd(), "stanford-ner-2017-06-09")
)
DEFAULT_JAR = os.environ.get("NER_JAR", "stanford-ner.jar")
DEFAULT_CLASSIFIER = os.environ.get("NER_CLASSIFIER", "english.muc.7class.distsim.crf.ser.gz")
DEFAULT_JAVA_HEAP_MB = int(os.environ.get("NER_JAVA_HEAP_MB", "1500"))

# Engine launch settings
JAVA_EXECUTABLE = os.environ.get("NER_JAVA", "java")
ENGINE_MAIN_CLASS = "edu.stanford.nlp.ie.crf.CRFClassifier"
CLASSIFIERS_DIR = "classifiers"
LIB_DIR = "lib"

# Process I/O settings
READ_CHUNK_SIZE = 65536       # Bytes per stdout read
STOP_GRACE_SECONDS = 5.0      # Wait after terminate() before kill()
OUTPUT_ENCODING = "utf-8"

def get_classifier_path(install_path: str, classifier: str) -> str:
    """Resolve the classifier file inside the installation directory."""
    return os.path.normpath(os.path.join(install_path, CLASSIFIERS_DIR, classifier))

def get_jar_path(install_path: str, jar: str) -> str:
    """Resolve the engine jar inside the installation directory."""
    return os.path.normpath(os.path.join(install_path, jar))

def get_lib_glob(install_path: str) -> str:
    """Classpath wildcard for the bundled library jars."""
    return os.path.join(os.path.normpath(os.path.join(install_path, LIB_DIR)), "*")

def get_classpath(install_path: str, jar: str) -> str:
    """Build the java classpath with the platform path separator."""
    return get_jar_path(install_path, jar) + os.pathsep + get_lib_glob(install_path)
