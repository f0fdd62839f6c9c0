"""
Parser for the tagged output of the Stanford NER engine.

Turns one line of ``word/TAG`` pairs into a mapping from entity tag to the
entities found in that sentence. Neighbouring tokens with the same tag are
merged into a single entity.
"""

import re
from typing import Dict, List, Optional, Tuple

NO_ENTITY_TAG = "O"

_TAGGED_TOKEN_RE = re.compile(r"(.+)/([A-Z]+)")

EntityGroup = Dict[str, List[str]]

def split_tagged_tokens(line: str) -> List[Tuple[str, str]]:
    """Split a line into (word, tag) pairs, dropping tokens that don't match."""
    tagged = []
    for token in line.split():
        match = _TAGGED_TOKEN_RE.fullmatch(token)
        if match:
            tagged.append((match.group(1), match.group(2)))
    return tagged

def _flush(entities: EntityGroup, tag: Optional[str], buffer: List[str]) -> None:
    # Always append: a trailing run must not replace earlier entities of its tag
    entities.setdefault(tag, []).append(" ".join(buffer))

def parse_line(line: str) -> EntityGroup:
    """Parse one tagged sentence into an entity group.

    Example:
        >>> parse_line("John/PERSON lives/O in/O New/LOCATION York/LOCATION")
        {'PERSON': ['John'], 'LOCATION': ['New York']}
    """
    entities: EntityGroup = {}
    buffer: List[str] = []
    prev_tag: Optional[str] = None

    for word, tag in split_tagged_tokens(line):
        if tag != NO_ENTITY_TAG:
            if tag != prev_tag and buffer:
                # Tag changed without an O in between, close the previous entity
                _flush(entities, prev_tag, buffer)
                buffer = []
            buffer.append(word)
        elif buffer:
            _flush(entities, prev_tag, buffer)
            buffer = []

        prev_tag = tag

    if buffer:
        _flush(entities, prev_tag, buffer)

    return entities

def parse_lines(lines: List[str]) -> List[EntityGroup]:
    """Parse several tagged sentences, one entity group per line."""
    return [parse_line(line) for line in lines]
