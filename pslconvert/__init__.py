"""
PlayStation level reader.

Turns a PlayStation level image into the same linked level graph a PC
level produces, ready for a PC level writer.
"""

from .config import ReaderConfig
from .errors import PSLReadError, TruncatedStreamError, IndexOutOfRangeError, LinkError
from .level import Level
from .parsers import PSLReader, read_psl_level

__all__ = [
    'ReaderConfig',
    'PSLReadError',
    'TruncatedStreamError',
    'IndexOutOfRangeError',
    'LinkError',
    'Level',
    'PSLReader',
    'read_psl_level',
]
