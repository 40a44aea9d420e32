# table.py - the Klondike table scene: turns mouse input into engine calls
import pygame
from typing import Dict, Optional, Tuple

from klondike import layout as L
from klondike import ui as U
from klondike.engine import KlondikeEngine


class KlondikeTableScene:
    """
    Klondike laid out as 14 slots.
    - Top row: stock (click to draw), waste, an unused slot, four foundations.
    - Bottom row: seven tableau columns.
    - Press on a card to pick it up, release over a pile to drop it there.
    - N deals a new game, Esc quits.
    """

    def __init__(self, app, engine: Optional[KlondikeEngine] = None):
        self.app = app
        self.quit_requested = False
        self.engine = engine if engine is not None else KlondikeEngine()
        self.engine.add_win_listener(self._on_win)
        self.positions: Dict[int, Tuple[int, int]] = {}
        self.message = ""
        self.compute_layout()

    # ----- Layout -----
    def compute_layout(self):
        gap = U.CARD_GAP_X
        row_w = 7 * U.CARD_W + 6 * gap
        left = max(10, (U.SCREEN_W - row_w) // 2)
        top_y = 40
        tab_y = top_y + U.CARD_H + 40
        # Stock, waste, reserved, then foundations fill the 7 top-row columns
        for col, slot_id in enumerate((L.STOCK, L.WASTE, L.RESERVED) + L.FOUNDATION_IDS):
            self.positions[slot_id] = (left + col * (U.CARD_W + gap), top_y)
        for col, slot_id in enumerate(L.TABLEAU_IDS):
            self.positions[slot_id] = (left + col * (U.CARD_W + gap), tab_y)

    def _fan(self, slot_id) -> int:
        return U.FAN_Y if L.is_tableau(slot_id) else 0

    def card_rect(self, slot_id, index) -> pygame.Rect:
        x, y = self.positions[slot_id]
        return pygame.Rect(x, y + index * self._fan(slot_id), U.CARD_W, U.CARD_H)

    def slot_rect(self, slot_id) -> pygame.Rect:
        n = len(self.engine.slots[slot_id].cards)
        r = self.card_rect(slot_id, 0)
        if n > 1:
            r.height += (n - 1) * self._fan(slot_id)
        return r

    def hit(self, pos) -> Optional[Tuple[int, int]]:
        """Return (slot_id, card_index) under pos; card_index is -1 for an empty slot."""
        for slot_id in range(L.SLOT_COUNT):
            cards = self.engine.slots[slot_id].cards
            if not cards:
                if self.card_rect(slot_id, 0).collidepoint(pos):
                    return slot_id, -1
                continue
            for i in reversed(range(len(cards))):
                if self.card_rect(slot_id, i).collidepoint(pos):
                    return slot_id, i
        return None

    def drop_target_at(self, pos) -> Optional[int]:
        for view in self.engine.views():
            if view.accepts_drops and self.slot_rect(view.id).collidepoint(pos):
                return view.id
        return None

    # ----- Engine callbacks -----
    def _on_win(self):
        self.message = "You Win! Press N for a new game."

    # ----- Event handling -----
    def handle_event(self, e):
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            hit = self.hit(e.pos)
            if hit is None:
                return
            slot_id, index = hit
            view = self.engine.slot_view(slot_id)
            if view.clickable:
                self.engine.draw()
                self._show_rejection()
                return
            if index >= 0 and view.draggable:
                self.engine.drag_start(slot_id, index)

        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            info = self.engine.drag_info
            if info is None:
                return
            target = self.drop_target_at(e.pos)
            if target is None or target == info.slot_id:
                # Dropped nowhere: the cards simply return
                self.engine.cancel_drag()
                return
            self.engine.drag_end(info.slot_id, info.card_index, target)
            self._show_rejection()

        elif e.type == pygame.KEYDOWN:
            if e.key == pygame.K_n:
                self.engine.new_game()
                self.message = ""
            elif e.key == pygame.K_ESCAPE:
                self.quit_requested = True

    def _show_rejection(self):
        if self.engine.won:
            return
        reason = self.engine.last_rejection
        self.message = reason.value if reason is not None else ""

    # ----- Drawing -----
    def draw(self, screen):
        screen.fill(U.TABLE_BG)
        info = self.engine.drag_info
        for view in self.engine.views():
            base = self.card_rect(view.id, 0)
            if not view.cards:
                U.draw_empty_slot(screen, base, dim=view.id == L.RESERVED)
                continue
            for i, c in enumerate(view.cards):
                # Cards being carried are drawn at the pointer instead
                if info is not None and info.slot_id == view.id and i >= info.card_index:
                    break
                screen.blit(U.get_card_surface(c), self.card_rect(view.id, i).topleft)

        if info is not None:
            mx, my = pygame.mouse.get_pos()
            for i, c in enumerate(info.cards):
                screen.blit(U.get_card_surface(c), (mx - U.CARD_W // 2, my - U.CARD_H // 2 + i * U.FAN_Y))

        hints = "N: New  ESC: Quit"
        h = U.FONT_UI.render(hints, True, U.WHITE)
        screen.blit(h, (U.SCREEN_W - h.get_width() - 20, 10))
        if self.message:
            msg = U.FONT_UI.render(self.message, True, (255, 255, 180))
            screen.blit(msg, (U.SCREEN_W // 2 - msg.get_width() // 2, U.SCREEN_H - 40))
