"""Performance benchmarks for ftlbind.

Benchmarks use pytest-benchmark to track the cost of parsing resources,
rendering through the holder and generating bindings.

Python 3.13+.
"""

from __future__ import annotations

__all__: list[str] = []
