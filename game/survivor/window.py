"""
Arcade window: renders snapshots and translates mouse input into arena targets
"""

from __future__ import annotations

import math
from typing import Optional

import arcade

from .entities import SessionState
from .frame_driver import FrameDriver
from .utils import Rect, to_arena_point


class SurvivorWindow(arcade.Window):
    """Arcade window for the survivor arena"""

    def __init__(self, driver: FrameDriver, title: str = "Survivor - Arcade", drive: bool = True):
        config = driver.controller.config
        super().__init__(int(config.width), int(config.height), title)
        self.driver = driver
        # When False, someone else (e.g. the gym adapter) steps the simulation
        self.drive = drive

        # Colors
        self.BG = (18, 18, 22)
        self.GRID_C = (16, 16, 16)
        self.PLAYER_C = (80, 200, 120)
        self.HAZARD_C = (255, 82, 82)
        self.HUNTER_C = (220, 120, 40)
        self.PICKUP_C = (240, 210, 80)
        self.HUD_C = (220, 220, 220)
        self.background_color = self.BG

    # ----------------------------
    # Input
    # ----------------------------

    def _target(self, x: float, y: float):
        config = self.driver.controller.config
        return to_arena_point(x, y, config.height, config.input_offset_y)

    def on_mouse_press(self, x, y, button, modifiers):
        self.driver.primary_action(self._target(x, y))

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        self.driver.controller.move_to(self._target(x, y))

    def on_mouse_release(self, x, y, button, modifiers):
        self.driver.controller.release()

    def on_update(self, delta_time: float):
        if self.drive:
            self.driver.tick()

    # ----------------------------
    # Drawing
    # ----------------------------

    def _lrbt(self, r: Rect):
        x, y, w, h = r
        return x, x + w, self.height - y - h, self.height - y

    def _fill(self, r: Rect, color):
        arcade.draw_lrbt_rectangle_filled(*self._lrbt(r), color)

    def _spike(self, r: Rect):
        left, right, bottom, top = self._lrbt(r)
        arcade.draw_triangle_filled(
            (left + right) / 2, top, left, bottom, right, bottom, self.HAZARD_C
        )

    def _overlay(self, lines, color=None):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (0, 0, 0, 190))
        y = self.height / 2 + 60
        for i, text in enumerate(lines):
            arcade.draw_text(text, self.width / 2, y, color if (color and i == 0) else self.HUD_C,
                             28 if i == 0 else 16, anchor_x="center")
            y -= 40 if i == 0 else 28

    def on_draw(self):
        self.clear()
        snap = self.driver.controller.snapshot()

        for x in range(0, self.width, 40):
            arcade.draw_line(x, 0, x, self.height, self.GRID_C)
        for y in range(0, self.height, 40):
            arcade.draw_line(0, y, self.width, y, self.GRID_C)

        for r in snap.hazards:
            self._spike(r)
        if snap.pickup is not None:
            self._fill(snap.pickup, self.PICKUP_C)
        if snap.hunter is not None:
            self._fill(snap.hunter, self.HUNTER_C)

        # Flicker while invincible
        player_c = self.PLAYER_C
        if snap.invincible and math.floor(snap.invincibility_remaining * 10) % 2 == 0:
            player_c = (*self.PLAYER_C, 100)
        self._fill(snap.player, player_c)

        # HUD
        arcade.draw_text(f"Score: {math.floor(snap.score)}", 20, self.height - 30, self.HUD_C, 16)
        arcade.draw_text(f"High: {math.floor(snap.high_score)}", 20, self.height - 55, self.HUD_C, 16)
        life = 24
        for i in range(snap.display_lives):
            x = self.width - (i + 1) * (life + 10)
            arcade.draw_lrbt_rectangle_filled(x, x + life, self.height - 20 - life,
                                              self.height - 20, self.PICKUP_C)

        if snap.state is SessionState.NOT_STARTED:
            self._overlay([
                "Survivor",
                "Drag to move (you sit above the pointer).",
                "Every 5 points: a pickup = +1 life.",
                "Every 10 points: the hunter comes for you.",
                "Avoid the spikes and the hunter. Click to start.",
            ])
        elif snap.state is SessionState.GAME_OVER:
            self._overlay([
                "YOU DIED",
                f"Score: {math.floor(snap.score)}",
                f"High Score: {math.floor(snap.high_score)}",
                "Click to restart.",
            ], color=self.HAZARD_C)


def run_window(driver: FrameDriver, title: Optional[str] = None):
    SurvivorWindow(driver, title or "Survivor - Arcade")
    arcade.run()
