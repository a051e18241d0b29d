"""Pygame rendering for the slime simulation.

The simulation core is headless; this module reads the final creature,
flower and particle state after a frame and draws it. Geometry helpers are
plain functions so they can be checked without a display.
"""

import math
from typing import List, Optional, Sequence, Tuple

import pygame

from slime.config.creature import (
    BODY_COLOR,
    EYE_COLOR,
    POWERED_UP_HUE_SPEED,
    PUPIL_COLOR,
    ROW_WAVE_AMPLITUDE,
    ROW_WAVE_FREQUENCY,
    ROW_WAVE_PHASE,
)
from slime.config.display import (
    BACKGROUND_COLOR,
    HUD_PANEL_ALPHA,
    HUD_PANEL_COLOR,
    HUD_TEXT_COLOR,
)
from slime.config.fireflies import FIREFLY_HUE
from slime.config.flower import (
    HALO_HUE_OFFSET,
    PETAL_ANGLE_STEP,
    RING_BASE_RADIUS,
    RING_COUNT,
    RING_FREQUENCY_STEP,
    RING_HUE_STEP,
    RING_RADIUS_STEP,
)
from slime.entities.creature import Creature
from slime.entities.flower import Flower
from slime.math_utils import Vector2, clamp, remap
from slime.simulation import SlimeSimulation
from slime.state_machine import SlimeState
from slime.systems.fireflies import Firefly

# Flower layer is drawn on a square surface this many pixels across
FLOWER_SURFACE_SIZE = 200
HALO_MAX_RADIUS = 50
HALO_RINGS = 10
HALO_RING_ALPHA = 0.04

CellRect = Tuple[int, int, int, int]


def hsva_color(hue: float, saturation: float, value: float, alpha: float = 100) -> pygame.Color:
    """Build a colour from hue (degrees) and saturation/value/alpha (0-100)."""
    color = pygame.Color(0, 0, 0)
    color.hsva = (hue % 360, saturation, value, alpha)
    return color


def body_color(creature: Creature, frame: int) -> pygame.Color:
    if creature.powered_up:
        return hsva_color(frame * POWERED_UP_HUE_SPEED, 80, 100)
    return pygame.Color(*BODY_COLOR)


def body_left(creature: Creature) -> float:
    """Screen x of the stretched body's left edge."""
    return creature.pos.x - creature.width * creature.stretch_x / 2


def body_cells(creature: Creature, frame: int) -> List[CellRect]:
    """Integer rectangles for every filled bitmap cell.

    Rows ripple sideways while the slime crawls. Cell edges are rounded
    from the running float position so neighbouring cells tile without gaps.
    """
    cell_w = creature.scale * creature.stretch_x
    cell_h = creature.scale * creature.stretch_y
    left = body_left(creature)
    cells: List[CellRect] = []

    for row, line in enumerate(creature.bitmap):
        wave_offset = (
            math.sin(frame * ROW_WAVE_FREQUENCY + row * ROW_WAVE_PHASE)
            * creature.scale
            * ROW_WAVE_AMPLITUDE
            * creature.move_dir
        )
        top = int(creature.pos.y + row * cell_h)
        bottom = int(creature.pos.y + (row + 1) * cell_h)
        for col, cell in enumerate(line):
            if cell != "X":
                continue
            x0 = int(left + col * cell_w + wave_offset)
            x1 = int(left + (col + 1) * cell_w + wave_offset)
            cells.append((x0, top, max(1, x1 - x0), max(1, bottom - top)))
    return cells


def eye_centers(creature: Creature) -> Tuple[Vector2, Vector2]:
    left = body_left(creature)
    eye_y = creature.pos.y + 8 * creature.scale * creature.stretch_y
    return (
        Vector2(left + 8 * creature.scale * creature.stretch_x, eye_y),
        Vector2(left + 12 * creature.scale * creature.stretch_x, eye_y),
    )


def pupil_position(eye: Vector2, pointer: Vector2, radius: float) -> Vector2:
    """Offset the pupil from the eye centre toward the pointer."""
    angle = math.atan2(pointer.y - eye.y, pointer.x - eye.x)
    return Vector2(eye.x + math.cos(angle) * radius, eye.y + math.sin(angle) * radius)


def flower_visible(creature: Creature, flower: Flower) -> bool:
    """The flower shows while the slime hunts or idles, or while it is dragged."""
    return flower.held or creature.state in (SlimeState.SEEKING, SlimeState.IDLE)


def petal_points(frame: int, ring: int) -> List[Tuple[float, float]]:
    """Point cloud for one petal ring, relative to the flower centre."""
    amplitude = remap(math.sin(math.radians(frame * 0.5)), -1, 1, 5, 15)
    base_freq = remap(math.cos(math.radians(frame * 0.25)), -1, 1, 3, 7)
    radius = RING_BASE_RADIUS + ring * RING_RADIUS_STEP
    freq = base_freq + ring * RING_FREQUENCY_STEP

    points = []
    steps = int(360 / PETAL_ANGLE_STEP)
    for i in range(steps):
        angle = math.radians(i * PETAL_ANGLE_STEP)
        dist = radius + math.sin(angle * freq) * amplitude
        points.append((math.cos(angle) * dist, math.sin(angle) * dist))
    return points


class SlimeRenderer:
    """Draws one simulation frame onto a pygame surface.

    Attributes:
        screen: Pygame surface to render to
        font: Font for the HUD (None disables the HUD)
    """

    def __init__(self, screen: pygame.Surface, font: Optional[pygame.font.Font] = None) -> None:
        self.screen = screen
        self.font = font
        self._particle_layer = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        self._flower_layer = pygame.Surface(
            (FLOWER_SURFACE_SIZE, FLOWER_SURFACE_SIZE), pygame.SRCALPHA
        )

    def render(self, simulation: SlimeSimulation, show_hud: bool = False) -> None:
        ctx = simulation.context
        frame = simulation.frame_count

        self.screen.fill(BACKGROUND_COLOR)
        self.draw_fireflies(ctx.fireflies, frame)
        if flower_visible(ctx.creature, ctx.flower):
            self.draw_flower(ctx.flower, frame)
        self.draw_slime(ctx.creature, frame, ctx.pointer)
        if show_hud:
            self.draw_hud(simulation)

    def draw_fireflies(self, fireflies: Sequence[Firefly], frame: int) -> None:
        layer = self._particle_layer
        layer.fill((0, 0, 0, 0))
        for fly in fireflies:
            flicker = fly.flicker(frame)
            brightness = remap(flicker, -1, 1, 40, 100)
            alpha = remap(flicker, -1, 1, 30, 90)
            center = (int(fly.x), int(fly.y))
            pygame.draw.circle(
                layer, hsva_color(FIREFLY_HUE, 50, brightness, alpha * 0.5), center, max(1, int(fly.size))
            )
            pygame.draw.circle(
                layer, hsva_color(FIREFLY_HUE, 50, brightness, alpha), center, max(1, int(fly.size / 2))
            )
        self.screen.blit(layer, (0, 0))

    def draw_flower(self, flower: Flower, frame: int) -> None:
        layer = self._flower_layer
        layer.fill((0, 0, 0, 0))
        half = FLOWER_SURFACE_SIZE // 2
        base_hue = (frame * 0.1) % 360

        # Halo: concentric discs, largest first, alpha accumulating inward
        halo_step = HALO_MAX_RADIUS / HALO_RINGS
        for k in range(1, HALO_RINGS + 1):
            radius = int(HALO_MAX_RADIUS - (k - 1) * halo_step)
            alpha = 100 * (1 - (1 - HALO_RING_ALPHA) ** k)
            pygame.draw.circle(layer, hsva_color(base_hue + HALO_HUE_OFFSET, 70, 100, alpha), (half, half), radius)

        for ring in range(RING_COUNT):
            color = hsva_color(base_hue + ring * RING_HUE_STEP, 80, 100, 80)
            for px, py in petal_points(frame, ring):
                layer.set_at((int(half + px), int(half + py)), color)

        self.screen.blit(layer, (int(flower.pos.x) - half, int(flower.pos.y) - half))

    def draw_slime(self, creature: Creature, frame: int, pointer: Vector2) -> None:
        color = body_color(creature, frame)
        for cell in body_cells(creature, frame):
            pygame.draw.rect(self.screen, color, cell)
        self.draw_eyes(creature, pointer)

    def draw_eyes(self, creature: Creature, pointer: Vector2) -> None:
        scale = creature.scale
        eye_size = scale * 2.5
        pupil_size = scale * 1.5
        highlight = pupil_size / 3
        eyes = eye_centers(creature)

        for eye in eyes:
            _draw_disc(self.screen, EYE_COLOR, eye.x, eye.y, eye_size)
            pupil = pupil_position(eye, pointer, scale * 0.5)
            _draw_disc(self.screen, PUPIL_COLOR, pupil.x, pupil.y, pupil_size)
            _draw_disc(
                self.screen, EYE_COLOR, pupil.x - highlight * 0.5, pupil.y - highlight * 0.5, highlight
            )

        # Eyebrows lift and drop with the pointer height
        left_eye, right_eye = eyes
        offset_y = clamp(remap(pointer.y - left_eye.y, -100, 100, -scale, scale), -scale, scale)
        brow_y = left_eye.y - scale * 1.8 + offset_y
        width = max(1, int(scale * 0.4))
        pygame.draw.line(
            self.screen,
            PUPIL_COLOR,
            (left_eye.x - scale, brow_y),
            (left_eye.x + scale, brow_y - scale * 0.2),
            width,
        )
        pygame.draw.line(
            self.screen,
            PUPIL_COLOR,
            (right_eye.x - scale, brow_y - scale * 0.2),
            (right_eye.x + scale, brow_y),
            width,
        )

    def draw_hud(self, simulation: SlimeSimulation) -> None:
        if self.font is None:
            return
        stats = simulation.get_stats()
        lines = [
            f"State: {stats['state']}",
            f"Size: {stats['scale']:.1f}",
            f"Eaten: {stats['eat_count']}/{simulation.config.creature.max_eat_count}",
            f"Frame: {stats['frame']}",
        ]
        if simulation.paused:
            lines.append("PAUSED")

        line_height = self.font.get_linesize()
        panel = pygame.Surface((180, line_height * len(lines) + 10))
        panel.set_alpha(HUD_PANEL_ALPHA)
        panel.fill(HUD_PANEL_COLOR)
        self.screen.blit(panel, (10, 10))
        for i, text in enumerate(lines):
            surface = self.font.render(text, True, HUD_TEXT_COLOR)
            self.screen.blit(surface, (15, 15 + i * line_height))


def _draw_disc(surface: pygame.Surface, color, cx: float, cy: float, diameter: float) -> None:
    rect = pygame.Rect(0, 0, max(1, int(diameter)), max(1, int(diameter)))
    rect.center = (int(cx), int(cy))
    pygame.draw.ellipse(surface, color, rect)
