"""
Remotable - local tenant records mirrored from a remote directory.

Failure categories for remote calls live in remotable.errors.
"""

__version__ = "0.1.0"
