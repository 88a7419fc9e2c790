"""Runtime package.

Keep this module dependency-light: importing `src.runtime.*` in unit tests
should not open sockets or read audio devices.
"""
