from __future__ import annotations

from collections.abc import Iterable, Mapping

from statemachine import State, StateMachine

from dualdm.narration import BranchOutcome


class TurnFSM(StateMachine):
    """Lifecycle of one turn (or intro).

    pending -> settled (every branch call finished, success or failure)
            -> persisted (every branch message stored) -> responded

    `settle` and `persist` are refused until every branch has reported in.
    """

    pending = State("pending", initial=True)
    settled = State("settled")
    persisted = State("persisted")
    responded = State("responded", final=True)

    settle = pending.to(settled, cond="all_branches_settled")
    persist = settled.to(persisted, cond="all_branches_persisted")
    respond = persisted.to(responded)

    def __init__(self, *, branch_ids: Iterable[int]):
        self.branch_ids = frozenset(branch_ids)
        self.outcomes: dict[int, BranchOutcome] = {}
        self.stored_branches: set[int] = set()
        super().__init__()

    def record_outcomes(self, outcomes: Mapping[int, BranchOutcome]) -> None:
        self.outcomes.update(outcomes)

    def mark_stored(self, branch_id: int) -> None:
        self.stored_branches.add(branch_id)

    def all_branches_settled(self) -> bool:
        return self.branch_ids <= self.outcomes.keys()

    def all_branches_persisted(self) -> bool:
        return self.branch_ids <= self.stored_branches
