"""
connect4_minimax.interfaces - User interfaces for Connect Four

This package contains the command-line interface for playing, watching
and analyzing games.
"""

# Don't import anything here to avoid circular imports
__all__ = []
