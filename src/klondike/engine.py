"""The game controller: owns the slots and funnels every change through a commit."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from klondike import common as C
from klondike import layout as L
from klondike import rules as R

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragInfo:
    """What is being carried during a drag. Display only."""

    slot_id: int
    card_index: int
    cards: Tuple[C.Card, ...]


@dataclass(frozen=True)
class SlotView:
    id: int
    kind: L.SlotKind
    cards: Tuple[C.Card, ...]
    accepts_drops: bool
    draggable: bool
    clickable: bool


class KlondikeEngine:
    def __init__(self, rng: Optional[random.Random] = None, slots: Optional[List[L.Slot]] = None):
        self.rng = rng if rng is not None else C.make_rng()
        self.slots: List[L.Slot] = []
        self.drag_info: Optional[DragInfo] = None
        self.last_rejection: Optional[R.Rejection] = None
        self._won = False
        self._win_listeners: List[Callable[[], None]] = []
        if slots is None:
            self.new_game()
        else:
            L.check_card_universe([c for s in slots for c in s.cards])
            self.slots = L.copy_slots(slots)
            self._check_win()

    # ----- Lifecycle -----
    def new_game(self) -> List[L.Slot]:
        self.slots = L.new_game_slots(self.rng)
        self.drag_info = None
        self.last_rejection = None
        self._won = False
        return self.slots

    @property
    def won(self) -> bool:
        return self._won

    def add_win_listener(self, callback: Callable[[], None]):
        self._win_listeners.append(callback)

    def _commit(self, candidate: List[L.Slot]) -> List[L.Slot]:
        self.slots = candidate
        self.last_rejection = None
        self._check_win()
        return self.slots

    def _reject(self, reason: R.Rejection) -> List[L.Slot]:
        self.last_rejection = reason
        log.debug("rejected: %s", reason.name)
        return self.slots

    def _check_win(self):
        if self._won or not R.is_won(self.slots):
            return
        self._won = True
        self.drag_info = None
        log.info("game won")
        for cb in list(self._win_listeners):
            cb()

    # ----- Stock / waste -----
    def draw(self) -> List[L.Slot]:
        if self._won:
            return self._reject(R.Rejection.GAME_WON)
        stock = self.slots[L.STOCK]
        waste = self.slots[L.WASTE]
        if not stock.cards and not waste.cards:
            return self._reject(R.Rejection.NOTHING_TO_DRAW)
        nxt = L.copy_slots(self.slots)
        if nxt[L.STOCK].cards:
            card = nxt[L.STOCK].cards.pop()
            card.face_up = True
            nxt[L.WASTE].cards.append(card)
            log.debug("drew %r", card)
        else:
            recycled = [c.copy(face_up=False) for c in nxt[L.WASTE].cards]
            nxt[L.STOCK].cards = C.shuffle_cards(recycled, self.rng)
            nxt[L.WASTE].cards = []
            log.debug("recycled %d waste cards into stock", len(recycled))
        return self._commit(nxt)

    # ----- Drag and drop -----
    def drag_start(self, slot_id: int, card_index: int) -> Optional[DragInfo]:
        self.drag_info = None
        if self._won or not (isinstance(slot_id, int) and 0 <= slot_id < L.SLOT_COUNT):
            return None
        slot = self.slots[slot_id]
        if not R.can_pick_up(slot, card_index):
            return None
        self.drag_info = DragInfo(
            slot_id=slot_id,
            card_index=card_index,
            cards=tuple(c.copy() for c in slot.cards[card_index:]),
        )
        return self.drag_info

    def cancel_drag(self):
        """Drop the carried stack back where it came from; nothing moves."""
        self.drag_info = None

    def drag_end(self, slot_id, card_index, target_id) -> List[L.Slot]:
        self.drag_info = None
        if self._won:
            return self._reject(R.Rejection.GAME_WON)
        reason = R.validate_move(self.slots, slot_id, card_index, target_id)
        if reason is not None:
            return self._reject(reason)
        log.debug("move %d[%d:] -> %d", slot_id, card_index, target_id)
        return self._commit(R.apply_move(self.slots, slot_id, card_index, target_id))

    # ----- Queries -----
    def slot_view(self, slot_id: int) -> SlotView:
        slot = self.slots[slot_id]
        live = not self._won
        return SlotView(
            id=slot.id,
            kind=slot.kind,
            cards=tuple(c.copy() for c in slot.cards),
            accepts_drops=live and slot.is_drop_target,
            draggable=live and slot.is_draggable,
            clickable=live and slot.id == L.STOCK,
        )

    def views(self) -> List[SlotView]:
        return [self.slot_view(i) for i in range(L.SLOT_COUNT)]

    def snapshot(self):
        return [[(c.rank, c.suit, c.face_up) for c in s.cards] for s in self.slots]
