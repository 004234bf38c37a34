"""Turn processing: history assembly and the start/turn flows."""

from dualdm.turn_processing.history import HistoryEntry, load_branch_history

__all__ = ["HistoryEntry", "load_branch_history"]
