"""
Error taxonomy for the Stanford NER stream wrapper.

Configuration and spawn errors are fatal at startup; engine state errors
surface misuse of the process handle or of a finished decoder.
"""


class NERError(Exception):
    """Base class for all errors raised by ner_stream."""


class ConfigurationError(NERError, FileNotFoundError):
    """A required installation file (classifier, jar) could not be found."""


class ProcessSpawnError(NERError):
    """The engine process could not be launched."""


class EngineStateError(NERError):
    """The engine or a decoder was used in a state that does not allow it."""


class EngineExitedError(NERError):
    """The engine closed its output while requests were still pending."""
