"""Behavior system: the slime's state machine.

Each frame exactly one handler runs, chosen by the current ``SlimeState``.
A handler mutates the shared creature/flower records (movement intent,
jump impulses, size targets, timers) and returns the next state, or None
to stay put. The system then applies the transition through the
``StateMachine`` so an edge missing from ``SLIME_TRANSITIONS`` fails loudly.

Timers count frames rather than seconds: a digestion pause is always
``pause_duration`` frames no matter how the display clock jitters. Size
changes use exponential easing, which decelerates into the target without
extra state, and snap exactly once within ``SIZE_SNAP_TOLERANCE``.

Input events (pointer presses, key presses) arrive through
``handle_event`` before the handler of the frame runs and may override the
table: grabbing the flower forces PAUSED, dropping it forces IDLE.

After the handler, the oversize safeguard resets a runaway slime back to
its initial size.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

from slime.config.creature import (
    EAT_BOX_HEIGHT,
    EAT_BOX_WIDTH,
    GROW_EASE,
    JUMP_TRIGGER_HEIGHT,
    JUMP_TRIGGER_WIDTH,
    KEY_JUMP_MAX_VY,
    SEEK_DEAD_ZONE,
    SEEK_JUMP_MAX_VY,
    SHRINK_EASE,
    SIZE_SNAP_TOLERANCE,
)
from slime.exceptions import ConfigurationError
from slime.input_events import JUMP_KEYS, InputEvent, KeyPressed, PointerMoved, PointerPressed
from slime.math_utils import lerp, sign
from slime.state_machine import SLIME_TRANSITIONS, SlimeState
from slime.systems.base import BaseSystem, SystemResult
from slime.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from slime.simulation import SimulationContext

logger = logging.getLogger(__name__)

StateHandler = Callable[["SimulationContext"], Optional[SlimeState]]

# States in which clicks on the slime and the jump key are ignored
BUSY_STATES = frozenset({SlimeState.PAUSED, SlimeState.GROWING, SlimeState.POKED})


# ============================================================================
# State handlers
# ============================================================================


def seek(ctx: "SimulationContext") -> Optional[SlimeState]:
    """Crawl toward the flower, jump for it when it is overhead, eat it on contact."""
    creature = ctx.creature
    flower = ctx.flower
    config = ctx.config.creature

    dx = flower.pos.x - creature.pos.x
    dy = flower.pos.y - creature.center_y
    width = creature.width
    height = creature.height

    if abs(dx) > SEEK_DEAD_ZONE:
        creature.move_dir = sign(dx)

    if (
        dy < -height * JUMP_TRIGGER_HEIGHT
        and abs(dx) < width * JUMP_TRIGGER_WIDTH
        and creature.can_jump(SEEK_JUMP_MAX_VY)
    ):
        creature.jump()

    if not flower.held and abs(dx) < width * EAT_BOX_WIDTH and abs(dy) < height * EAT_BOX_HEIGHT:
        creature.powered_up = True
        creature.target_scale = creature.scale + config.grow_amount
        creature.eat_count = min(creature.eat_count + 1, config.max_eat_count)
        logger.info(
            f"Slime ate flower ({creature.eat_count}/{config.max_eat_count}), "
            f"growing to {creature.target_scale:.1f}"
        )
        return SlimeState.GROWING

    return None


def grow(ctx: "SimulationContext") -> Optional[SlimeState]:
    creature = ctx.creature
    creature.scale = lerp(creature.scale, creature.target_scale, GROW_EASE)

    if abs(creature.scale - creature.target_scale) < SIZE_SNAP_TOLERANCE:
        creature.scale = creature.target_scale
        creature.pause_timer = ctx.config.creature.pause_duration
        return SlimeState.PAUSED
    return None


def pause(ctx: "SimulationContext") -> Optional[SlimeState]:
    """Digest. The countdown only runs while the flower is not held."""
    creature = ctx.creature
    config = ctx.config.creature

    if not ctx.flower.held and creature.pause_timer > 0:
        creature.pause_timer -= 1
    if creature.pause_timer > 0:
        return None

    creature.powered_up = False
    if creature.eat_count >= config.max_eat_count:
        logger.info("Slime is full, shrinking back")
        return SlimeState.SHRINKING

    ctx.spawner.respawn(ctx.flower, creature)
    creature.idle_timer = config.idle_duration
    return SlimeState.IDLE


def shrink(ctx: "SimulationContext") -> Optional[SlimeState]:
    creature = ctx.creature
    config = ctx.config.creature
    initial = config.initial_pixel_size

    creature.scale = lerp(creature.scale, initial, SHRINK_EASE)
    creature.target_scale = initial

    if abs(creature.scale - initial) < SIZE_SNAP_TOLERANCE:
        creature.scale = initial
        creature.eat_count = 0
        ctx.spawner.respawn(ctx.flower, creature)
        creature.idle_timer = config.idle_duration
        return SlimeState.IDLE
    return None


def idle(ctx: "SimulationContext") -> Optional[SlimeState]:
    creature = ctx.creature
    if creature.idle_timer > 0:
        creature.idle_timer -= 1
    if creature.idle_timer <= 0:
        return SlimeState.SEEKING
    return None


def poked(ctx: "SimulationContext") -> Optional[SlimeState]:
    """Wobble, then idle. A poke during a shrink resumes the shrink."""
    creature = ctx.creature
    if creature.poke_timer > 0:
        creature.poke_timer -= 1
    if creature.poke_timer > 0:
        return None

    resume = creature.poke_resume_state
    creature.poke_resume_state = None
    if resume is SlimeState.SHRINKING:
        return SlimeState.SHRINKING
    creature.idle_timer = ctx.config.creature.idle_duration // 2
    return SlimeState.IDLE


STATE_HANDLERS: Dict[SlimeState, StateHandler] = {
    SlimeState.SEEKING: seek,
    SlimeState.GROWING: grow,
    SlimeState.PAUSED: pause,
    SlimeState.SHRINKING: shrink,
    SlimeState.IDLE: idle,
    SlimeState.POKED: poked,
}


def validate_handlers(handlers: Mapping[SlimeState, StateHandler]) -> None:
    """Fail at startup if any state lacks a handler or a transition entry."""
    missing_handlers = [state.name for state in SlimeState if state not in handlers]
    missing_edges = [state.name for state in SlimeState if state not in SLIME_TRANSITIONS]
    if missing_handlers or missing_edges:
        raise ConfigurationError(
            f"Incomplete slime behavior table: missing handlers {missing_handlers}, "
            f"missing transition entries {missing_edges}"
        )


# ============================================================================
# Behavior system
# ============================================================================


@runs_in_phase(UpdatePhase.THINK)
class BehaviorSystem(BaseSystem):
    """Runs the per-state handler and applies input-driven overrides.

    Attributes:
        handlers: State -> handler table, checked for exhaustiveness at startup
        oversize_resets: Number of times the oversize safeguard fired
    """

    def __init__(
        self,
        context: "SimulationContext",
        handlers: Optional[Mapping[SlimeState, StateHandler]] = None,
    ) -> None:
        super().__init__(context, "Behavior")
        self.handlers: Mapping[SlimeState, StateHandler] = (
            handlers if handlers is not None else STATE_HANDLERS
        )
        validate_handlers(self.handlers)
        self.oversize_resets: int = 0

    def _do_update(self, frame: int) -> SystemResult:
        ctx = self._context
        creature = ctx.creature
        creature.move_dir = 0

        current = creature.state
        next_state = self.handlers[current](ctx)
        details: Dict[str, Any] = {"state": current.name}

        if next_state is not None and next_state is not current:
            creature.state_machine.transition(next_state, frame=frame, reason=f"{current.name} handler")
            logger.debug(f"Frame {frame}: {current.name} -> {next_state.name}")
            details["transition"] = next_state.name

        if self.check_oversize(frame):
            details["oversize_reset"] = True

        return SystemResult(entities_affected=1, details=details)

    def check_oversize(self, frame: int) -> bool:
        """Hard-reset the slime if it has grown wider than the safeguard allows.

        A held flower is released and respawned as part of the reset so the
        slime restarts from a clean SEEKING state.
        """
        ctx = self._context
        creature = ctx.creature
        config = ctx.config.creature
        screen_width = ctx.config.display.screen_width

        if creature.width <= config.oversize_factor * screen_width:
            return False

        logger.warning(
            f"Slime width {creature.width:.0f} exceeds {config.oversize_factor}x viewport; resetting"
        )
        creature.scale = config.initial_pixel_size
        creature.target_scale = config.initial_pixel_size
        creature.powered_up = False
        creature.pos.x = screen_width / 2
        creature.state_machine.force_state(SlimeState.SEEKING, frame=frame, reason="oversize reset")

        if ctx.flower.held:
            ctx.flower.held = False
            ctx.spawner.respawn(ctx.flower, creature)

        self.oversize_resets += 1
        return True

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def handle_event(self, event: InputEvent) -> None:
        if isinstance(event, PointerMoved):
            self.handle_pointer_moved(event.x, event.y)
        elif isinstance(event, PointerPressed):
            self.handle_pointer_pressed(event.x, event.y)
        elif isinstance(event, KeyPressed):
            self.handle_key_pressed(event.key)
        else:
            raise TypeError(f"Unsupported input event: {event!r}")

    def handle_pointer_moved(self, x: float, y: float) -> None:
        ctx = self._context
        ctx.pointer.update(x, y)
        if ctx.flower.held:
            ctx.flower.move_to(x, y)

    def handle_pointer_pressed(self, x: float, y: float) -> None:
        """Grab/drop the flower, or poke the slime."""
        self.handle_pointer_moved(x, y)
        ctx = self._context

        if ctx.flower.is_under(ctx.pointer):
            self.toggle_flower_held()
        elif ctx.creature.contains_point(x, y):
            self.poke()

    def handle_key_pressed(self, key: str) -> None:
        creature = self._context.creature
        if key not in JUMP_KEYS:
            return
        if creature.state in BUSY_STATES or not creature.can_jump(KEY_JUMP_MAX_VY):
            return
        creature.jump()

    def toggle_flower_held(self) -> None:
        ctx = self._context
        creature = ctx.creature
        flower = ctx.flower
        flower.held = not flower.held

        if flower.held:
            creature.pause_timer = 0
            creature.idle_timer = 0
            creature.state_machine.force_state(
                SlimeState.PAUSED, frame=ctx.frame, reason="flower picked up"
            )
            logger.debug("Flower picked up")
        else:
            creature.idle_timer = ctx.config.creature.idle_duration
            creature.state_machine.force_state(
                SlimeState.IDLE, frame=ctx.frame, reason="flower dropped"
            )
            logger.debug(f"Flower dropped at ({flower.pos.x:.0f}, {flower.pos.y:.0f})")

    def poke(self) -> bool:
        """Start the wobble if the slime is not busy.

        Returns:
            True if the slime entered POKED
        """
        ctx = self._context
        creature = ctx.creature
        if creature.state in BUSY_STATES:
            return False

        interrupted = creature.state
        result = creature.state_machine.try_transition(
            SlimeState.POKED, frame=ctx.frame, reason="poked"
        )
        if result.is_err():
            logger.debug(result.error)
            return False

        # The shrink still owes a flower respawn and the eat_count reset
        creature.poke_resume_state = interrupted if interrupted is SlimeState.SHRINKING else None
        creature.poke_timer = ctx.config.creature.poke_duration
        return True

    def get_debug_info(self) -> Dict[str, Any]:
        info = super().get_debug_info()
        info["state"] = self._context.creature.state.name
        info["oversize_resets"] = self.oversize_resets
        return info
