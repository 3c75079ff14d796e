"""
Test support utilities for chronicle tests.

Host types and transformations shared across test modules live in
``tests._support.hosts``; pytest fixtures built on them live in
``tests/conftest.py``.
"""
