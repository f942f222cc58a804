"""Command-line tools and debug helpers.

- :mod:`scan` is the ``dtmf-scan`` entry point for CSV recordings.
- :mod:`debug` provides opt-in timing instrumentation (``DTMFDETECT_DEBUG``).
"""
