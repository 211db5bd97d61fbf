"""choretally - household chore tally backed by an encrypted document store."""

__version__ = "0.1.0"
