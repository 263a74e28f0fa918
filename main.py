from __future__ import annotations
import argparse
import sys
from typing import Dict, List, Optional, Tuple

try:
    import pygame  # type: ignore
except Exception:
    pygame = None

from config import (
    COOKING,
    FPS,
    LEVEL_UP_EVERY,
    LOW_STOCK_THRESHOLD,
    OVEN,
    PLATING,
    PREPARING,
    READY,
    SCREEN_H,
    SCREEN_W,
    STOVE,
    TICK_INTERVAL_MS,
    WAITING,
    WIN_THRESHOLD,
)
from game import KitchenSim, events
from game.errors import KitchenError
from game.fractions import multiplier_text, scale

HELP_LINES = (
    "Click a waiting order to start preparing it.",
    "Scale every ingredient by requested servings / base servings.",
    "Type each amount, then Enter cooks on the stove or Tab bakes in the oven.",
    "When the dish is ready press Enter to plate it and Enter again to serve.",
    f"Every {LEVEL_UP_EVERY} orders raise the level. Serve {WIN_THRESHOLD} customers to win!",
)


def autoplay_step(sim: KitchenSim) -> Optional[str]:
    """Make one move the way a careful chef would.

    Picks the least patient waiting customer, types the exact scaled amounts,
    cooks, plates and serves.  Returns the rejection message when the kitchen
    refuses the move (for example when the pantry has run dry).
    """
    active = sim.book.active
    try:
        if active is None:
            waiting = [order for order in sim.book if order.status == WAITING]
            if waiting:
                sim.select_order(min(waiting, key=lambda order: order.patience).order_id)
        elif active.status == PREPARING:
            for ingredient, amount in scale(active.recipe, active.requested_serving).items():
                sim.set_ingredient_input(active.order_id, ingredient, f"{amount:.2f}")
            station = OVEN if active.recipe.difficulty >= 2 else STOVE
            sim.commit_to_cooking(active.order_id, station)
        elif active.status == READY:
            if sim.station == PLATING:
                sim.serve_order(active.order_id)
            else:
                sim.advance_to_plating(active.order_id)
    except KitchenError as exc:
        sim.log_rejection(exc)
        return str(exc)
    return None


def run_headless(ticks: int, seed: int) -> KitchenSim:
    sim = KitchenSim(seed=seed)
    sim.start_session()
    refusals = 0
    for _ in range(ticks):
        if autoplay_step(sim) is not None:
            refusals += 1
        sim.tick(TICK_INTERVAL_MS)
        if not sim.running:
            break

    session = sim.session
    print(
        f"headless_done t={sim.time_ms / 1000.0:.1f}s orders={len(sim.book)} "
        f"session[score={session.score},level={session.level},"
        f"completed={session.completed}/{WIN_THRESHOLD},abandoned={session.abandoned},won={session.won}]"
        f" refusals={refusals} low_stock={','.join(sim.inventory.low_stock()) or '-'}"
    )
    return sim


class GameUI:
    def __init__(self, sim: KitchenSim):
        if pygame is None:
            raise RuntimeError("pygame is required for graphical mode. Relaunch with --headless.")
        pygame.init()
        if not pygame.display.get_init():
            raise RuntimeError("Display subsystem is unavailable. Relaunch with --headless.")
        self.sim = sim
        self.screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
        pygame.display.set_caption("Fraction Kitchen")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("arial", 22)
        self.small = pygame.font.SysFont("arial", 17)
        self.running = True
        self.focused_ingredient: Optional[str] = None
        self.order_rects: List[Tuple[pygame.Rect, str]] = []
        self.input_rects: List[Tuple[pygame.Rect, str]] = []
        self.feedback: Dict[str, bool] = {}
        self.on_title = True
        self.show_help = False
        self.banner: Optional[str] = None
        sim.events.subscribe(events.LEVEL_UP, self._on_level_up)
        sim.events.subscribe(events.SESSION_WON, self._on_session_won)

        self.palette = {
            "bg": (24, 18, 14),
            "panel": (38, 30, 24),
            "panel_border": (92, 70, 52),
            "text": (246, 238, 226),
            "muted": (196, 178, 156),
            "good": (106, 212, 148),
            "bad": (232, 102, 61),
            "accent": (255, 186, 88),
        }

    def _notify(self, exc: KitchenError) -> None:
        self.sim.log_rejection(exc)

    def _on_level_up(self, data: dict) -> None:
        self.banner = f"Level {data['level']}! Customers are arriving faster."

    def _on_session_won(self, data: dict) -> None:
        self.banner = f"You served {data['completed']} customers for {data['score']} points!"

    def start_session(self) -> None:
        self.on_title = False
        self.show_help = False
        self.banner = None
        self.feedback = {}
        self.focused_ingredient = None
        self.sim.start_session()

    def handle_title_key(self, key: int) -> None:
        if key == pygame.K_h:
            self.show_help = not self.show_help
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            self.start_session()

    def _active_id(self) -> Optional[str]:
        return self.sim.book.active_id

    def handle_click(self, pos: Tuple[int, int]) -> None:
        for rect, order_id in self.order_rects:
            if rect.collidepoint(pos):
                try:
                    self.sim.select_order(order_id)
                    self.feedback = {}
                    self.focused_ingredient = None
                except KitchenError as exc:
                    self._notify(exc)
                return
        for rect, ingredient in self.input_rects:
            if rect.collidepoint(pos):
                self.focused_ingredient = ingredient
                return

    def handle_text(self, ev) -> None:
        order = self.sim.book.active
        if order is None or order.status != PREPARING or self.focused_ingredient is None:
            return
        current = order.state.inputs.get(self.focused_ingredient, "")
        if ev.key == pygame.K_BACKSPACE:
            current = current[:-1]
        elif ev.unicode and (ev.unicode.isdigit() or ev.unicode == "."):
            current += ev.unicode
        else:
            return
        try:
            self.feedback = self.sim.set_ingredient_input(order.order_id, self.focused_ingredient, current)
        except KitchenError as exc:
            self._notify(exc)

    def handle_action(self, key: int) -> None:
        order_id = self._active_id()
        if order_id is None:
            return
        try:
            if key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                status = self.sim.book.get(order_id).status
                if status == PREPARING:
                    self.sim.commit_to_cooking(order_id, STOVE)
                elif status == READY and self.sim.station != PLATING:
                    self.sim.advance_to_plating(order_id)
                elif status == READY:
                    self.sim.serve_order(order_id)
            elif key == pygame.K_TAB:
                self.sim.commit_to_cooking(order_id, OVEN)
        except KitchenError as exc:
            self._notify(exc)

    def handle_input(self) -> None:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                self.running = False
            if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1 and not self.on_title:
                self.handle_click(ev.pos)
            if ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    self.running = False
                elif self.on_title:
                    self.handle_title_key(ev.key)
                elif ev.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_TAB):
                    self.handle_action(ev.key)
                elif ev.key == pygame.K_n and not self.sim.running:
                    self.start_session()
                else:
                    self.handle_text(ev)

    def _text(self, text: str, pos: Tuple[int, int], color=None, font=None) -> None:
        surface = (font or self.small).render(text, True, color or self.palette["text"])
        self.screen.blit(surface, pos)

    def _bar(self, rect: pygame.Rect, pct: float, hue: Tuple[int, int, int]) -> None:
        pygame.draw.rect(self.screen, (58, 48, 40), rect, border_radius=6)
        fill = pygame.Rect(rect.x, rect.y, int(rect.w * max(0.0, min(1.0, pct / 100.0))), rect.h)
        pygame.draw.rect(self.screen, hue, fill, border_radius=6)

    def draw_orders(self) -> None:
        self.order_rects = []
        self._text("Orders", (20, 70), self.palette["accent"], self.font)
        for idx, order in enumerate(self.sim.book):
            rect = pygame.Rect(20, 104 + idx * 40, 300, 36)
            border = self.palette["accent"] if order.order_id == self._active_id() else self.palette["panel_border"]
            pygame.draw.rect(self.screen, self.palette["panel"], rect, border_radius=8)
            pygame.draw.rect(self.screen, border, rect, width=1, border_radius=8)
            label = f"{order.customer_name}: {order.requested_serving}x {order.recipe.display_name} [{order.status}]"
            self._text(label, (rect.x + 8, rect.y + 2))
            self._bar(pygame.Rect(rect.x + 8, rect.y + 24, 200, 7), order.patience_pct, self.palette["good"])
            self._text(f"{order.patience_seconds}s", (rect.x + 216, rect.y + 18), self.palette["muted"])
            self.order_rects.append((rect, order.order_id))

    def draw_workspace(self) -> None:
        self.input_rects = []
        x, y = 350, 70
        order = self.sim.book.active
        self._text(f"Station: {self.sim.station or '-'}", (x, y), self.palette["accent"], self.font)
        if order is None:
            self._text("Click a waiting order to start preparing.", (x, y + 36), self.palette["muted"])
            return
        recipe = order.recipe
        self._text(f"{recipe.display_name} for {order.customer_name}", (x, y + 36), font=self.font)
        self._text(f"Multiplier: {multiplier_text(recipe, order.requested_serving)}", (x, y + 66))
        if order.status == PREPARING:
            for idx, (ingredient, amount) in enumerate(recipe.ingredients):
                row = y + 100 + idx * 42
                self._text(f"{ingredient}: {amount:g} x {order.requested_serving}/{recipe.base_serving}", (x, row + 8))
                rect = pygame.Rect(x + 260, row, 120, 32)
                ok = self.feedback.get(ingredient)
                border = self.palette["muted"] if ok is None else (self.palette["good"] if ok else self.palette["bad"])
                if ingredient == self.focused_ingredient:
                    border = self.palette["accent"]
                pygame.draw.rect(self.screen, self.palette["panel"], rect, border_radius=6)
                pygame.draw.rect(self.screen, border, rect, width=2, border_radius=6)
                self._text(order.state.inputs.get(ingredient, ""), (rect.x + 8, rect.y + 6))
                self.input_rects.append((rect, ingredient))
            self._text("Enter: cook on stove | Tab: bake in oven", (x, y + 110 + len(recipe.ingredients) * 42), self.palette["muted"])
        elif order.status in (COOKING, READY):
            self._bar(pygame.Rect(x, y + 100, 360, 18), order.cooking_progress or 0.0, self.palette["accent"])
            hint = "Cooking in progress..." if order.status == COOKING else "Ready! Enter to plate, Enter again to serve"
            self._text(hint, (x, y + 128), self.palette["muted"])

    def draw_inventory(self) -> None:
        x = SCREEN_W - 230
        self._text("Inventory", (x, 70), self.palette["accent"], self.font)
        for idx, (ingredient, qty) in enumerate(self.sim.inventory_snapshot().items()):
            color = self.palette["bad"] if qty < LOW_STOCK_THRESHOLD else self.palette["text"]
            self._text(f"{ingredient:<12} {qty:5.1f}", (x, 104 + idx * 24), color)

    def draw_title(self) -> None:
        self.screen.fill(self.palette["bg"])
        x = SCREEN_W // 2 - 260
        self._text("Fraction Kitchen", (x, 120), self.palette["accent"], self.font)
        self._text("Master fractions while running a busy kitchen!", (x, 160))
        if self.show_help:
            self._text("How to play", (x, 220), self.palette["accent"], self.font)
            for idx, line in enumerate(HELP_LINES):
                self._text(f"{idx + 1}. {line}", (x, 256 + idx * 28))
        else:
            self._text("Press H for how to play", (x, 220), self.palette["muted"])
        self._text("Press Enter to open the kitchen", (x, SCREEN_H - 160), self.palette["accent"], self.font)
        pygame.display.flip()

    def draw(self) -> None:
        if self.on_title:
            self.draw_title()
            return
        self.screen.fill(self.palette["bg"])
        session = self.sim.session
        header = (
            f"Fraction Kitchen | Level {session.level} | Score {session.score} "
            f"| Served {session.completed}/{WIN_THRESHOLD} | Lost {session.abandoned}"
        )
        self._text(header, (20, 20), font=self.font)
        self.draw_orders()
        self.draw_workspace()
        self.draw_inventory()
        for idx, message in enumerate(self.sim.event_log[-5:]):
            self._text(message, (20, SCREEN_H - 130 + idx * 22), self.palette["muted"])
        if not self.sim.running:
            self._text("Kitchen closed. Press N for a new session.", (350, SCREEN_H - 170), self.palette["accent"], self.font)
        if self.banner:
            self._text(self.banner, (350, SCREEN_H - 200), self.palette["good"], self.font)
        pygame.display.flip()

    def run(self) -> None:
        while self.running:
            elapsed_ms = self.clock.tick(FPS)
            self.handle_input()
            self.sim.advance(elapsed_ms)
            self.draw()
        self.sim.stop()
        pygame.quit()


def main() -> None:
    parser = argparse.ArgumentParser(description="Fraction Kitchen: practise scaling recipes against the clock")
    parser.add_argument("--headless", action="store_true", help="run an autoplay session without graphics")
    parser.add_argument("--ticks", type=int, default=6000, help="headless ticks to run")
    parser.add_argument("--seed", type=int, default=7, help="random seed for order generation")
    args = parser.parse_args()

    if args.headless:
        run_headless(args.ticks, args.seed)
        return

    try:
        ui = GameUI(KitchenSim(seed=args.seed))
    except RuntimeError as exc:
        print(f"Startup error: {exc}", file=sys.stderr)
        sys.exit(1)
    ui.run()


if __name__ == "__main__":
    main()
