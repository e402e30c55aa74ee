"""ukechord: chord charts, chord names and voice leading for the ukulele."""

__version__ = "0.1.0"
