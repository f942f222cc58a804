"""Sample input helpers (sample sources and CSV recordings).

Utility modules here keep input concerns isolated from the detector:
- :mod:`samples` defines the :class:`Samples` protocol plus in-memory and
  chunk-stream sources.
- :mod:`sample_loader` parses CSV recordings for offline scans.
"""
