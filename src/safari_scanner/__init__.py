"""Safari Storage Scanner - measure how much disk space Safari data uses.

This package walks the Safari cookie, cache, history, local storage and
database directories, totals their sizes and item counts, and reports the
results on the console or streams them to HTTP clients as they are found.
"""

from safari_scanner.__main__ import main

__all__ = ["main"]
