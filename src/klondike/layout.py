"""Slots and the opening deal."""

from __future__ import annotations

import logging
import random
from collections import Counter
from enum import Enum
from typing import List, Optional, Sequence

from klondike import common as C

log = logging.getLogger(__name__)

SLOT_COUNT = 14
STOCK = 0
WASTE = 1
RESERVED = 2
FOUNDATION_IDS = (3, 4, 5, 6)
TABLEAU_IDS = (7, 8, 9, 10, 11, 12, 13)

# Tableau slot -> number of cards dealt to it
TABLEAU_COUNTS = {slot_id: n for n, slot_id in enumerate(TABLEAU_IDS, start=1)}


class SlotKind(Enum):
    STOCK = "stock"
    WASTE = "waste"
    RESERVED = "reserved"
    FOUNDATION = "foundation"
    TABLEAU = "tableau"


def slot_kind(slot_id: int) -> SlotKind:
    if slot_id == STOCK:
        return SlotKind.STOCK
    if slot_id == WASTE:
        return SlotKind.WASTE
    if slot_id == RESERVED:
        return SlotKind.RESERVED
    if slot_id in FOUNDATION_IDS:
        return SlotKind.FOUNDATION
    if slot_id in TABLEAU_IDS:
        return SlotKind.TABLEAU
    raise ValueError(f"unknown slot id {slot_id!r}")


def is_foundation(slot_id: Optional[int]) -> bool:
    return slot_id in FOUNDATION_IDS


def is_tableau(slot_id: Optional[int]) -> bool:
    return slot_id in TABLEAU_IDS


class Slot:
    """One numbered card container. Cards are stored bottom to top."""

    __slots__ = ("id", "cards")

    def __init__(self, slot_id: int, cards: Optional[List[C.Card]] = None):
        self.id = slot_id
        self.cards: List[C.Card] = cards if cards is not None else []

    @property
    def kind(self) -> SlotKind:
        return slot_kind(self.id)

    @property
    def is_drop_target(self) -> bool:
        return self.id not in (STOCK, WASTE, RESERVED)

    @property
    def is_draggable(self) -> bool:
        return self.id != STOCK

    def top(self) -> Optional[C.Card]:
        return self.cards[-1] if self.cards else None

    def copy(self) -> "Slot":
        return Slot(self.id, [c.copy() for c in self.cards])

    def __repr__(self):
        return f"Slot({self.id}, {self.cards!r})"


def copy_slots(slots: Sequence[Slot]) -> List[Slot]:
    return [s.copy() for s in slots]


def check_card_universe(cards: Sequence[C.Card]) -> None:
    """Raise ValueError unless ``cards`` is exactly the 52-card deck."""
    counts = Counter(c.key for c in cards)
    if counts != Counter(C.card_universe()):
        dupes = sorted(k for k, n in counts.items() if n > 1)
        missing = sorted(set(C.card_universe()) - set(counts))
        raise ValueError(f"not a full deck (duplicates={dupes}, missing={missing})")


def deal_slots(deck: Sequence[C.Card]) -> List[Slot]:
    """Partition ``deck`` front to back into the 14 opening slots."""
    check_card_universe(deck)
    slots = [Slot(i) for i in range(SLOT_COUNT)]
    pos = 0
    for slot_id in TABLEAU_IDS:
        n = TABLEAU_COUNTS[slot_id]
        dealt = deck[pos:pos + n]
        pos += n
        # Only the last dealt card of a column is face up
        slots[slot_id].cards = [c.copy(face_up=(i == n - 1)) for i, c in enumerate(dealt)]
    slots[STOCK].cards = [c.copy(face_up=False) for c in deck[pos:]]
    return slots


def new_game_slots(rng: Optional[random.Random] = None) -> List[Slot]:
    slots = deal_slots(C.make_deck(shuffle=True, rng=rng))
    log.info("dealt new game: %d cards in stock", len(slots[STOCK].cards))
    return slots
