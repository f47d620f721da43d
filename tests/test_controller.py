import random

import pytest

from bars import Role
from controller import (
    Command,
    Phase,
    RunState,
    Visualizer,
    adjust_speed,
    cycle_algorithm,
    toggle_pause,
    toggle_run,
)
from settings import DEFAULT_SPEED, IDLE_DELAY_MS, SPEED_MAX, SPEED_MIN
from sorters import Algorithm


@pytest.fixture
def vis(rng):
    return Visualizer(20, rng=rng)


def run_until_finished(vis, limit=10_000):
    vis.apply(Command.TOGGLE_RUN)
    for _ in range(limit):
        vis.frame()
        if vis.state.finished:
            return
    raise AssertionError("did not finish")


def test_startup_state(vis):
    assert vis.state == RunState()
    assert vis.state.algorithm is Algorithm.BUBBLE
    assert vis.state.speed == DEFAULT_SPEED
    assert vis.state.phase is Phase.IDLE
    assert vis.bars.is_permutation()


def test_run_state_is_immutable():
    state = RunState()
    with pytest.raises(AttributeError):
        state.speed = 3


def test_pure_handlers_return_new_state():
    state = RunState()
    running = toggle_run(state)
    assert running.running and not state.running
    assert toggle_pause(running).phase is Phase.PAUSED
    assert cycle_algorithm(state, -1).algorithm is Algorithm.QUICK


def test_toggle_run_is_noop_when_finished():
    state = RunState(finished=True)
    assert toggle_run(state) is state


@pytest.mark.parametrize("delta, repeats, expected", [
    (-5, 50, SPEED_MIN),
    (5, 50, SPEED_MAX),
])
def test_speed_is_clamped(delta, repeats, expected):
    state = RunState()
    for _ in range(repeats):
        state = adjust_speed(state, delta)
        assert SPEED_MIN <= state.speed <= SPEED_MAX
    assert state.speed == expected


def test_faster_and_slower_commands(vis):
    vis.apply(Command.FASTER)
    assert vis.state.speed == DEFAULT_SPEED - 5
    vis.apply(Command.SLOWER)
    vis.apply(Command.SLOWER)
    assert vis.state.speed == DEFAULT_SPEED + 5


def test_state_machine_transitions(vis):
    assert vis.apply(Command.TOGGLE_RUN).phase is Phase.RUNNING
    assert vis.apply(Command.TOGGLE_PAUSE).phase is Phase.PAUSED
    assert vis.apply(Command.TOGGLE_PAUSE).phase is Phase.RUNNING
    assert vis.apply(Command.TOGGLE_RUN).phase is Phase.IDLE


def test_frame_steps_only_when_running(vis):
    assert vis.frame() == IDLE_DELAY_MS
    assert vis.engine.steps == 0

    vis.apply(Command.TOGGLE_RUN)
    assert vis.frame() == vis.state.speed
    assert vis.engine.steps == 1

    vis.apply(Command.TOGGLE_PAUSE)
    assert vis.frame() == IDLE_DELAY_MS
    assert vis.engine.steps == 1


@pytest.mark.parametrize("algorithm", list(Algorithm))
def test_running_to_completion_finishes(algorithm, rng):
    vis = Visualizer(25, rng=rng, state=RunState(algorithm=algorithm), verify_every=1)
    run_until_finished(vis)
    assert vis.state.phase is Phase.FINISHED
    assert not vis.state.running
    assert vis.bars.is_sorted()
    assert vis.bars.roles() == [Role.SORTED] * 25

    # Finished is terminal until a reset
    vis.apply(Command.TOGGLE_RUN)
    assert vis.state.phase is Phase.FINISHED
    assert vis.frame() == IDLE_DELAY_MS


@pytest.mark.parametrize("command", [
    Command.RESET_SORTED,
    Command.SHUFFLE,
    Command.NEXT_ALGORITHM,
    Command.PREV_ALGORITHM,
])
def test_restart_commands_clear_flags_and_engine(vis, command):
    run_until_finished(vis)
    vis.apply(Command.TOGGLE_PAUSE)

    state = vis.apply(command)
    assert not (state.running or state.paused or state.finished)
    assert state.phase is Phase.IDLE
    assert vis.engine.steps == 0
    assert vis.get_stats() == {"steps": 0, "swaps": 0, "writes": 0}
    assert all(role is Role.IDLE for role in vis.bars.roles())


def test_reset_gives_ascending_array(vis):
    vis.apply(Command.RESET_SORTED)
    assert vis.bars.values() == list(range(1, 21))


def test_shuffle_keeps_permutation(vis):
    vis.apply(Command.RESET_SORTED)
    vis.apply(Command.SHUFFLE)
    assert vis.bars.is_permutation()
    assert vis.bars.values() != list(range(1, 21))


def test_switch_algorithm_cycles_and_reshuffles(vis):
    vis.apply(Command.RESET_SORTED)
    vis.apply(Command.NEXT_ALGORITHM)
    assert vis.state.algorithm is Algorithm.SELECTION
    assert type(vis.engine).__name__ == "SelectionSort"
    assert vis.bars.is_permutation()
    assert vis.bars.values() != list(range(1, 21))

    vis.apply(Command.PREV_ALGORITHM)
    vis.apply(Command.PREV_ALGORITHM)
    assert vis.state.algorithm is Algorithm.QUICK


def test_quit_is_a_state_flag(vis):
    state = vis.apply(Command.QUIT)
    assert state.quit


def test_stats_count_swaps(rng):
    vis = Visualizer(10, rng=rng)
    run_until_finished(vis)
    stats = vis.get_stats()
    assert stats["steps"] == 45
    assert stats["swaps"] > 0
    assert stats["writes"] == 0


def test_verification_catches_broken_permutation(rng):
    vis = Visualizer(10, rng=rng, verify_every=1)
    vis.apply(Command.TOGGLE_RUN)
    vis.bars.write(0, vis.bars.value(1))
    with pytest.raises(AssertionError):
        vis.frame()


def test_pause_pressed_while_idle_carries_into_run(vis):
    state = vis.apply(Command.TOGGLE_PAUSE)
    assert state.paused
    assert state.phase is Phase.IDLE

    assert vis.apply(Command.TOGGLE_RUN).phase is Phase.PAUSED
    assert vis.frame() == IDLE_DELAY_MS
    assert vis.engine.steps == 0

    assert vis.apply(Command.TOGGLE_PAUSE).phase is Phase.RUNNING
    vis.frame()
    assert vis.engine.steps == 1
