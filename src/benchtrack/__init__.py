"""benchtrack: tooling for gh-pages benchmark history files.

Reads, validates, appends to and reports on the
``window.BENCHMARK_DATA = {...}`` files rendered by the benchmark dashboard.
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
