"""Move legality, move execution and the win check.

Everything here is pure: functions read the slots they are given and
``apply_move`` works on a copy, so a rejected move never touches the
caller's state.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from klondike import common as C
from klondike import layout as L


class Rejection(Enum):
    """Why an action left the state unchanged."""

    MISSING_ENDPOINT = "Drop needs both a source and a target"
    UNKNOWN_SLOT = "No such slot"
    BAD_INDEX = "No card at that position"
    SAME_SLOT = "Card dropped back on its own pile"
    FOUNDATION_TO_FOUNDATION = "Cards cannot move between foundations"
    STOCK_TARGET = "Cards cannot be dropped on the stock"
    NOT_DRAGGABLE = "That card cannot be picked up"
    MULTI_CARD_TO_FOUNDATION = "Foundations take one card at a time"
    FOUNDATION_RULE = "Foundations build up by suit from Ace"
    TABLEAU_RULE = "Tableau builds down in alternating colors; only a King fills a gap"
    NOTHING_TO_DRAW = "Stock and waste are both empty"
    GAME_WON = "The game is already won"


def can_drop_on_foundation(existing: Sequence[C.Card], card: C.Card) -> bool:
    if not existing:
        return card.rank == "A"
    top = existing[-1]
    return card.suit == top.suit and card.rank_index == top.rank_index + 1


def can_drop_on_tableau(existing: Sequence[C.Card], card: C.Card) -> bool:
    if not existing:
        return card.rank == "K"
    top = existing[-1]
    return card.color() != top.color() and card.rank_index == top.rank_index - 1


def can_pick_up(slot: L.Slot, card_index: int) -> bool:
    """Face-up top card anywhere, or any face-up card within a Tableau."""
    if not slot.is_draggable or not isinstance(card_index, int):
        return False
    if not 0 <= card_index < len(slot.cards):
        return False
    if not slot.cards[card_index].face_up:
        return False
    return L.is_tableau(slot.id) or card_index == len(slot.cards) - 1


def _known(slot_id) -> bool:
    return isinstance(slot_id, int) and 0 <= slot_id < L.SLOT_COUNT


def precheck(source_id, target_id) -> Optional[Rejection]:
    """Categorical checks that need no cards."""
    if source_id is None or target_id is None:
        return Rejection.MISSING_ENDPOINT
    if not (_known(source_id) and _known(target_id)):
        return Rejection.UNKNOWN_SLOT
    if source_id == target_id:
        return Rejection.SAME_SLOT
    if L.is_foundation(source_id) and L.is_foundation(target_id):
        return Rejection.FOUNDATION_TO_FOUNDATION
    return None


def validate_move(
    slots: Sequence[L.Slot], source_id, card_index, target_id
) -> Optional[Rejection]:
    """Return None if the move is legal, else the reason it is not."""
    reason = precheck(source_id, target_id)
    if reason is not None:
        return reason
    if target_id == L.STOCK:
        return Rejection.STOCK_TARGET
    source = slots[source_id]
    if not isinstance(card_index, int) or not 0 <= card_index < len(source.cards):
        return Rejection.BAD_INDEX
    if not can_pick_up(source, card_index):
        return Rejection.NOT_DRAGGABLE

    moving = source.cards[card_index:]
    target = slots[target_id]
    if L.is_foundation(target_id):
        if len(moving) != 1:
            return Rejection.MULTI_CARD_TO_FOUNDATION
        if not can_drop_on_foundation(target.cards, moving[0]):
            return Rejection.FOUNDATION_RULE
    elif L.is_tableau(target_id):
        if not can_drop_on_tableau(target.cards, moving[0]):
            return Rejection.TABLEAU_RULE
    # Waste and the reserved slot take whatever passed the checks above
    return None


def apply_move(
    slots: Sequence[L.Slot], source_id: int, card_index: int, target_id: int
) -> List[L.Slot]:
    """Return a new slot list with the run from ``card_index`` moved to the target."""
    nxt = L.copy_slots(slots)
    source = nxt[source_id]
    target = nxt[target_id]
    moving = source.cards[card_index:]
    for c in moving:
        c.face_up = True
    target.cards.extend(moving)
    del source.cards[card_index:]
    # Reveal-on-expose
    if L.is_tableau(source_id) and source.cards and not source.cards[-1].face_up:
        source.cards[-1].face_up = True
    return nxt


def is_won(slots: Sequence[L.Slot]) -> bool:
    return all(len(slots[i].cards) == len(C.RANKS) for i in L.FOUNDATION_IDS)
