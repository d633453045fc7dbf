"""Rules of a train-on-a-grid arcade game: geometry, colliders, world generation and simulation."""

__version__ = "0.1.0"