"""
Salmon escapement summaries and location maps built from ADF&G daily counts.
"""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("salmon-escapement")
except importlib.metadata.PackageNotFoundError:
    __version__ = "unknown"
