"""Turn-based narrative game server with two independent AI dungeon masters."""

__version__ = "0.1.0"
