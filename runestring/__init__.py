from .codepoints import CodepointString
from .decoder import decode, is_joiner, is_modifier, try_read
from .grapheme import GraphemeCluster, GraphemeString
from .logging import log
from .seq import ImmutableSequence, compare
from .types import (
    Codepoint,
    ErrorPolicy,
    InvalidMultipleBase,
    InvalidSequence,
    NullArgument,
    OutOfRange,
    RuneError,
    codepoint,
)

__version__ = "0.1.0"
