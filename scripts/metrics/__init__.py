"""
Shared utilities for the red tag tools.

This package provides common utilities used across components:
- jsonl_utils: JSONL file reading/writing with locking
- config: Unified configuration management
"""

from .jsonl_utils import JSONLReader, JSONLWriter
from .config import RedTagConfig, config

__all__ = [
    'JSONLReader',
    'JSONLWriter',
    'RedTagConfig',
    'config',
]

__version__ = '1.0.0'
