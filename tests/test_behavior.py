"""Tests for the slime behavior state machine.

Covers each state handler, the input-driven overrides (flower grab/drop,
poke, jump key), the oversize safeguard and the startup exhaustiveness
check.
"""

import pytest

from slime.exceptions import ConfigurationError
from slime.input_events import KeyPressed, PointerMoved, PointerPressed
from slime.state_machine import SlimeState
from slime.systems.behavior import (
    STATE_HANDLERS,
    BehaviorSystem,
    grow,
    seek,
    validate_handlers,
)


def place_flower(simulation, dx, dy):
    """Put the flower at an offset from the slime's centre."""
    creature = simulation.creature
    simulation.flower.move_to(creature.pos.x + dx, creature.center_y + dy)


def force(simulation, state):
    simulation.creature.state_machine.force_state(state, reason="test setup")


class TestSeeking:
    """SEEKING: steer, jump and eat."""

    def test_steers_toward_flower_on_the_right(self, grounded_simulation):
        place_flower(grounded_simulation, 100, 0)

        next_state = seek(grounded_simulation.context)

        assert next_state is None
        assert grounded_simulation.creature.move_dir == 1
        assert grounded_simulation.creature.vy == 0.0

    def test_steers_toward_flower_on_the_left(self, grounded_simulation):
        place_flower(grounded_simulation, -100, 0)
        seek(grounded_simulation.context)
        assert grounded_simulation.creature.move_dir == -1

    def test_dead_zone_stops_steering(self, grounded_simulation):
        place_flower(grounded_simulation, 4, -200)
        seek(grounded_simulation.context)
        assert grounded_simulation.creature.move_dir == 0

    def test_level_flower_is_approached_without_jumping(self, grounded_simulation):
        sim = grounded_simulation
        place_flower(sim, 100, 0)

        for _ in range(200):
            dx = sim.flower.pos.x - sim.creature.pos.x
            if sim.creature.state is not SlimeState.SEEKING or dx <= 5:
                break
            sim.update()
            if sim.creature.state is SlimeState.SEEKING:
                assert sim.creature.move_dir == 1
            # Resting bounce only, never a jump impulse
            assert sim.creature.vy > -1.0

        assert sim.creature.state is SlimeState.GROWING

    def test_jumps_for_flower_overhead(self, grounded_simulation):
        creature = grounded_simulation.creature
        place_flower(grounded_simulation, 10, -creature.height * 0.5)

        seek(grounded_simulation.context)

        assert creature.vy == -grounded_simulation.config.creature.jump_strength

    def test_no_jump_while_already_moving_vertically(self, grounded_simulation):
        creature = grounded_simulation.creature
        creature.vy = 3.0
        place_flower(grounded_simulation, 10, -creature.height * 0.5)

        seek(grounded_simulation.context)

        assert creature.vy == 3.0

    def test_no_jump_when_flower_is_far_sideways(self, grounded_simulation):
        creature = grounded_simulation.creature
        place_flower(grounded_simulation, creature.width, -creature.height * 0.5)

        seek(grounded_simulation.context)

        assert creature.vy == 0.0

    def test_eats_flower_inside_collision_box(self, grounded_simulation):
        creature = grounded_simulation.creature
        start_scale = creature.scale
        place_flower(grounded_simulation, 5, 5)

        next_state = seek(grounded_simulation.context)

        assert next_state is SlimeState.GROWING
        assert creature.powered_up is True
        assert creature.target_scale == start_scale + grounded_simulation.config.creature.grow_amount
        assert creature.eat_count == 1

    def test_held_flower_cannot_be_eaten(self, grounded_simulation):
        place_flower(grounded_simulation, 0, 0)
        grounded_simulation.flower.held = True

        assert seek(grounded_simulation.context) is None
        assert grounded_simulation.creature.eat_count == 0

    def test_move_intent_is_reset_every_frame(self, grounded_simulation):
        sim = grounded_simulation
        force(sim, SlimeState.IDLE)
        sim.creature.idle_timer = 10
        sim.creature.move_dir = 1

        sim.behavior.update(1)

        assert sim.creature.move_dir == 0


class TestGrowing:
    """GROWING: exponential easing with an exact snap."""

    def test_growth_converges_with_exact_snap(self, simulation):
        creature = simulation.creature
        target = creature.scale + simulation.config.creature.grow_amount
        creature.target_scale = target
        force(simulation, SlimeState.GROWING)

        steps = 0
        while creature.state is SlimeState.GROWING:
            steps += 1
            simulation.behavior.update(steps)
            assert steps < 100, "growth did not converge"

        assert creature.state is SlimeState.PAUSED
        assert creature.scale == target
        assert creature.pause_timer == simulation.config.creature.pause_duration

        to_paused = [
            t
            for t in creature.state_machine.history
            if t.from_state is SlimeState.GROWING and t.to_state is SlimeState.PAUSED
        ]
        assert len(to_paused) == 1

    def test_growth_is_monotonic(self, simulation):
        creature = simulation.creature
        creature.target_scale = creature.scale + 2.0
        previous = creature.scale

        while grow(simulation.context) is None:
            assert creature.scale > previous
            previous = creature.scale


class TestPaused:
    """PAUSED: digestion countdown."""

    def test_countdown_then_idle_with_new_flower(self, simulation):
        creature = simulation.creature
        force(simulation, SlimeState.PAUSED)
        creature.pause_timer = 3
        creature.eat_count = 1
        creature.powered_up = True
        spawned = simulation.context.spawner.total_spawned

        for frame in range(1, 3):
            simulation.behavior.update(frame)
            assert creature.state is SlimeState.PAUSED

        simulation.behavior.update(3)

        assert creature.state is SlimeState.IDLE
        assert creature.powered_up is False
        assert creature.idle_timer == simulation.config.creature.idle_duration
        assert simulation.context.spawner.total_spawned == spawned + 1

    def test_countdown_freezes_while_flower_is_held(self, simulation):
        creature = simulation.creature
        force(simulation, SlimeState.PAUSED)
        creature.pause_timer = 3
        simulation.flower.held = True

        for frame in range(10):
            simulation.behavior.update(frame)

        assert creature.state is SlimeState.PAUSED
        assert creature.pause_timer == 3

    def test_full_slime_starts_shrinking(self, simulation):
        creature = simulation.creature
        force(simulation, SlimeState.PAUSED)
        creature.pause_timer = 1
        creature.eat_count = simulation.config.creature.max_eat_count

        simulation.behavior.update(1)

        assert creature.state is SlimeState.SHRINKING


class TestShrinking:
    def test_shrink_snaps_to_initial_and_resets_eat_count(self, simulation):
        creature = simulation.creature
        config = simulation.config.creature
        creature.scale = config.initial_pixel_size + config.grow_amount * config.max_eat_count
        creature.eat_count = config.max_eat_count
        force(simulation, SlimeState.SHRINKING)

        frame = 0
        while creature.state is SlimeState.SHRINKING:
            frame += 1
            simulation.behavior.update(frame)
            assert frame < 500, "shrink did not converge"

        assert creature.state is SlimeState.IDLE
        assert creature.scale == config.initial_pixel_size
        assert creature.eat_count == 0
        assert creature.idle_timer == config.idle_duration


class TestIdle:
    def test_idle_counts_down_to_seeking(self, simulation):
        creature = simulation.creature
        force(simulation, SlimeState.IDLE)
        creature.idle_timer = 2

        simulation.behavior.update(1)
        assert creature.state is SlimeState.IDLE
        simulation.behavior.update(2)
        assert creature.state is SlimeState.SEEKING


class TestPoke:
    """Clicking the slime makes it wobble, then idle."""

    def poke_point(self, simulation):
        creature = simulation.creature
        return creature.pos.x, creature.center_y

    def test_poke_lasts_exactly_poke_duration(self, simulation):
        config = simulation.config.creature
        simulation.post_event(PointerPressed(*self.poke_point(simulation)))

        for _ in range(config.poke_duration - 1):
            simulation.update()
            assert simulation.creature.state is SlimeState.POKED

        simulation.update()

        assert simulation.creature.state is SlimeState.IDLE
        assert simulation.creature.idle_timer == config.idle_duration // 2

    def test_poke_arms_timer(self, simulation):
        simulation.behavior.handle_pointer_pressed(*self.poke_point(simulation))

        assert simulation.creature.state is SlimeState.POKED
        assert simulation.creature.poke_timer == simulation.config.creature.poke_duration

    @pytest.mark.parametrize(
        "busy_state", [SlimeState.PAUSED, SlimeState.GROWING, SlimeState.POKED]
    )
    def test_poke_ignored_while_busy(self, simulation, busy_state):
        force(simulation, busy_state)
        simulation.creature.poke_timer = 7

        simulation.behavior.handle_pointer_pressed(*self.poke_point(simulation))

        assert simulation.creature.state is busy_state
        assert simulation.creature.poke_timer == 7

    @pytest.mark.parametrize("state", [SlimeState.SEEKING, SlimeState.IDLE, SlimeState.SHRINKING])
    def test_poke_allowed_from_calm_states(self, simulation, state):
        force(simulation, state)
        assert simulation.behavior.poke() is True
        assert simulation.creature.state is SlimeState.POKED

    def test_poke_mid_shrink_resumes_shrinking(self, grounded_simulation):
        sim = grounded_simulation
        creature = sim.creature
        config = sim.config.creature
        creature.scale = config.initial_pixel_size + config.grow_amount * config.max_eat_count
        creature.target_scale = creature.scale
        creature.pos.y = sim.config.display.ground - creature.height
        creature.eat_count = config.max_eat_count
        force(sim, SlimeState.SHRINKING)
        # The last meal is still sitting inside the eat box, off the click point
        place_flower(sim, 0, -40)
        spawner = sim.context.spawner
        spawned = spawner.total_spawned

        sim.post_event(PointerPressed(creature.pos.x, creature.center_y))
        for _ in range(config.poke_duration):
            sim.update()
        assert creature.state is SlimeState.SHRINKING
        assert creature.poke_resume_state is None

        for _ in range(400):
            sim.update()
            if creature.state is SlimeState.GROWING:
                assert spawner.total_spawned > spawned, "ate a flower that was never respawned"

        assert creature.eat_count <= 1
        assert spawner.total_spawned > spawned

    def test_poke_from_idle_returns_to_idle(self, simulation):
        force(simulation, SlimeState.IDLE)
        simulation.behavior.poke()
        simulation.creature.poke_timer = 1

        simulation.behavior.update(1)

        assert simulation.creature.state is SlimeState.IDLE

    def test_click_on_empty_space_does_nothing(self, simulation):
        simulation.behavior.handle_pointer_pressed(5, 5)
        assert simulation.creature.state is SlimeState.SEEKING


class TestFlowerHandling:
    """Grabbing and dropping the flower."""

    def test_pickup_while_seeking_forces_paused(self, simulation):
        creature = simulation.creature
        flower = simulation.flower
        creature.pause_timer = 50
        creature.idle_timer = 50

        simulation.behavior.handle_pointer_pressed(flower.pos.x, flower.pos.y)

        assert flower.held is True
        assert creature.state is SlimeState.PAUSED
        assert creature.pause_timer == 0
        assert creature.idle_timer == 0

    def test_pickup_leaves_paused_on_next_frame(self, simulation):
        flower = simulation.flower
        simulation.behavior.handle_pointer_pressed(flower.pos.x, flower.pos.y)

        simulation.update()

        assert simulation.creature.state in (SlimeState.IDLE, SlimeState.SHRINKING)

    def test_pickup_of_full_slime_leads_to_shrinking(self, simulation):
        simulation.creature.eat_count = simulation.config.creature.max_eat_count
        flower = simulation.flower
        simulation.behavior.handle_pointer_pressed(flower.pos.x, flower.pos.y)

        simulation.update()

        assert simulation.creature.state is SlimeState.SHRINKING

    def test_drop_forces_idle(self, simulation):
        flower = simulation.flower
        simulation.behavior.handle_pointer_pressed(flower.pos.x, flower.pos.y)
        simulation.behavior.handle_pointer_pressed(flower.pos.x, flower.pos.y)

        assert flower.held is False
        assert simulation.creature.state is SlimeState.IDLE
        assert simulation.creature.idle_timer == simulation.config.creature.idle_duration

    def test_held_flower_tracks_pointer(self, simulation):
        flower = simulation.flower
        simulation.post_event(PointerPressed(flower.pos.x, flower.pos.y))
        simulation.post_event(PointerMoved(300, 200))

        simulation.update()

        assert flower.held is True
        assert (flower.pos.x, flower.pos.y) == (300, 200)

    def test_double_click_in_one_frame_toggles_twice(self, simulation):
        flower = simulation.flower
        simulation.post_event(PointerPressed(flower.pos.x, flower.pos.y))
        simulation.post_event(PointerPressed(flower.pos.x, flower.pos.y))

        simulation.update()

        assert flower.held is False
        assert simulation.creature.state is SlimeState.IDLE

    def test_held_flower_is_not_respawned(self, simulation):
        flower = simulation.flower
        simulation.behavior.handle_pointer_pressed(flower.pos.x, flower.pos.y)
        spawned = simulation.context.spawner.total_spawned

        simulation.update()

        assert simulation.context.spawner.total_spawned == spawned


class TestJumpKey:
    def test_space_jumps_from_rest(self, grounded_simulation):
        grounded_simulation.behavior.handle_key_pressed("space")
        assert grounded_simulation.creature.vy == -grounded_simulation.config.creature.jump_strength

    def test_posted_key_event_jumps(self, grounded_simulation):
        sim = grounded_simulation
        sim.post_event(KeyPressed("space"))
        sim.update()
        # One frame of gravity applied after the impulse
        assert sim.creature.vy == pytest.approx(
            -sim.config.creature.jump_strength + sim.config.creature.gravity
        )

    def test_other_keys_are_ignored(self, grounded_simulation):
        grounded_simulation.behavior.handle_key_pressed("x")
        assert grounded_simulation.creature.vy == 0.0

    def test_no_jump_while_fast(self, grounded_simulation):
        grounded_simulation.creature.vy = 6.0
        grounded_simulation.behavior.handle_key_pressed("space")
        assert grounded_simulation.creature.vy == 6.0

    @pytest.mark.parametrize(
        "busy_state", [SlimeState.PAUSED, SlimeState.GROWING, SlimeState.POKED]
    )
    def test_no_jump_while_busy(self, grounded_simulation, busy_state):
        force(grounded_simulation, busy_state)
        grounded_simulation.behavior.handle_key_pressed("space")
        assert grounded_simulation.creature.vy == 0.0


class TestOversizeSafeguard:
    def oversize(self, simulation):
        creature = simulation.creature
        limit = simulation.config.creature.oversize_factor * simulation.config.display.screen_width
        creature.scale = limit / creature.columns + 1
        creature.target_scale = creature.scale
        creature.powered_up = True
        creature.pos.x = 100

    def test_runaway_growth_is_reset(self, simulation):
        creature = simulation.creature
        self.oversize(simulation)
        force(simulation, SlimeState.PAUSED)
        creature.pause_timer = 50

        simulation.behavior.update(1)

        assert creature.state is SlimeState.SEEKING
        assert creature.scale == simulation.config.creature.initial_pixel_size
        assert creature.powered_up is False
        assert creature.pos.x == simulation.config.display.screen_width / 2
        assert simulation.behavior.oversize_resets == 1

    def test_reset_releases_held_flower(self, simulation):
        flower = simulation.flower
        simulation.behavior.handle_pointer_pressed(flower.pos.x, flower.pos.y)
        self.oversize(simulation)

        simulation.behavior.update(1)

        assert flower.held is False
        assert simulation.creature.state is SlimeState.SEEKING
        spawner = simulation.context.spawner
        assert spawner.is_clear(flower.pos.x, flower.pos.y, simulation.creature)

    def test_normal_size_is_left_alone(self, simulation):
        assert simulation.behavior.check_oversize(1) is False


class TestEatCycle:
    """Whole-simulation runs feeding the slime as fast as it can eat."""

    def run_feeding(self, simulation, frames):
        creature = simulation.creature
        config = simulation.config.creature
        shrink_completions = 0
        previous_state = creature.state

        for _ in range(frames):
            if creature.state is SlimeState.SEEKING:
                simulation.flower.move_to(creature.pos.x, creature.center_y)
            simulation.update()

            assert creature.scale > 0
            assert 0 <= creature.eat_count <= config.max_eat_count

            if previous_state is SlimeState.SHRINKING and creature.state is SlimeState.IDLE:
                shrink_completions += 1
                assert creature.eat_count == 0
                assert creature.scale == config.initial_pixel_size
            previous_state = creature.state

        return shrink_completions

    def test_eat_count_bounded_and_reset_after_shrink(self, simulation):
        assert self.run_feeding(simulation, 3000) >= 1

    def test_max_size_reached_before_shrinking(self, simulation):
        config = simulation.config.creature
        creature = simulation.creature
        peak = creature.scale
        for _ in range(2000):
            if creature.state is SlimeState.SEEKING:
                simulation.flower.move_to(creature.pos.x, creature.center_y)
            simulation.update()
            peak = max(peak, creature.scale)

        expected_peak = config.initial_pixel_size + config.grow_amount * config.max_eat_count
        assert peak == pytest.approx(expected_peak)


class TestHandlerTable:
    def test_default_table_is_exhaustive(self):
        validate_handlers(STATE_HANDLERS)

    def test_missing_handler_fails_at_startup(self, simulation):
        handlers = dict(STATE_HANDLERS)
        del handlers[SlimeState.POKED]

        with pytest.raises(ConfigurationError, match="POKED"):
            BehaviorSystem(simulation.context, handlers=handlers)

    def test_unknown_event_type_is_rejected(self, simulation):
        with pytest.raises(TypeError):
            simulation.behavior.handle_event("click")
