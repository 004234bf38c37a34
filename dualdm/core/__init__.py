"""Core primitives for composing model-facing chat messages."""

