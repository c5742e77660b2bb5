"""
Config Package

Reader configuration (format constants).
"""

from .reader_config import ReaderConfig
