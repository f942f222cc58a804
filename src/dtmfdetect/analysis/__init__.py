"""DTMF analysis: Goertzel resonators, per-block detection, and streaming.

Modules here operate on NumPy arrays of interleaved samples and stay free
of I/O so they can be reused in command-line scripts, automated tests, or
live capture loops alike:
- :mod:`keys` defines :class:`PhoneKey` and the fixed frequency tables.
- :mod:`goertzel` measures a single frequency bin.
- :mod:`detector` turns one block into one key per channel.
- :mod:`analyzer` tracks keys across blocks and reports start/stop changes.
- :mod:`tones` pairs those changes into complete tones.
"""
