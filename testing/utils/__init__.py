"""
Shared testing utilities for note workflow tests.

- fakes: in-memory extractor, generator and writer doubles
"""

from .fakes import FailingWriter, FakeExtractor, FakeGenerator

__all__ = [
    "FakeExtractor",
    "FakeGenerator",
    "FailingWriter",
]
