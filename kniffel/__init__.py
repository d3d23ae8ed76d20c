"""
Kniffel.

A five-dice scoring game engine: rules, turn state machine and an
in-memory game store for the request layer to sit on.
"""

__version__ = "0.1.0"
