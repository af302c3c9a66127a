"""
Order matcher: reconciles prototypes against function bodies.

Prototypes are queued as they are scanned; each non-exempt definition
must name the function at the front of the queue.  Matching is strictly
positional: a definition never matches a later queue entry, so both
lists must share the same order.

  SCANNING     filling the queue from a leading run of declarations
  RECONCILING  every further item must be a definition matching the front
  DONE         input consumed with an empty queue
  VIOLATED     a violation was raised; the matcher accepts no more input
"""

import logging
from collections import deque
from enum import Enum
from typing import Deque, Iterable, Iterator, Optional

from declorder.errors import (
    DeclarationWithoutDefinition,
    DefinitionWithoutDeclaration,
    OutOfOrderMatch,
    UnexpectedDeclaration,
    Violation,
)
from declorder.models import DeclarationItem, DefinitionItem, Item

logger = logging.getLogger(__name__)


class MatchState(Enum):
    SCANNING = "scanning"
    RECONCILING = "reconciling"
    DONE = "done"
    VIOLATED = "violated"


class OrderMatcher:
    """One validation run's pending queue and state."""

    def __init__(self):
        self.pending: Deque[DeclarationItem] = deque()
        self.state = MatchState.SCANNING
        self.matched = 0

    # ────────────────────────────────────────────────────────────────
    #  Phase 1: declarations
    # ────────────────────────────────────────────────────────────────

    def scan(self, items: Iterator[Item]) -> Optional[DefinitionItem]:
        """Queue declarations until the first definition.

        Consumes ``items`` up to and including the first definition, which
        is returned (and the matcher switches to RECONCILING).  Returns
        None when the iterator is exhausted first.
        """
        self._require(MatchState.SCANNING)
        for item in items:
            if isinstance(item, DefinitionItem):
                self.state = MatchState.RECONCILING
                logger.debug(
                    "First definition '%s' at %s; %d declaration(s) pending",
                    item.identifier, item.location, len(self.pending),
                )
                return item
            self.pending.append(item)
        return None

    # ────────────────────────────────────────────────────────────────
    #  Phase 2: definitions
    # ────────────────────────────────────────────────────────────────

    def reconcile(self, items: Iterable[Item]) -> None:
        for item in items:
            self.reconcile_one(item)

    def reconcile_one(self, item: Item) -> None:
        if self.state is MatchState.SCANNING:
            self.state = MatchState.RECONCILING
        self._require(MatchState.RECONCILING)

        if isinstance(item, DeclarationItem):
            self._fail(UnexpectedDeclaration(item.node_location or item.location))

        if item.is_exempt:
            return

        if not self.pending:
            self._fail(DefinitionWithoutDeclaration(item.location))

        decl = self.pending.popleft()
        if decl.identifier != item.identifier:
            self._fail(OutOfOrderMatch(decl.location, item.location))
        self.matched += 1

    # ────────────────────────────────────────────────────────────────
    #  Termination
    # ────────────────────────────────────────────────────────────────

    def finish(self) -> None:
        """Fail if any declaration is still waiting for its definition."""
        if self.state is MatchState.VIOLATED:
            raise RuntimeError("matcher already reported a violation")
        if self.pending:
            self._fail(DeclarationWithoutDefinition(self.pending[0].location))
        self.state = MatchState.DONE
        logger.debug("Matched %d function(s)", self.matched)

    def _require(self, state: MatchState) -> None:
        if self.state is not state:
            raise RuntimeError(
                f"matcher is {self.state.value}, expected {state.value}"
            )

    def _fail(self, violation: Violation) -> None:
        self.state = MatchState.VIOLATED
        raise violation
