"""
controller.py — состояние запуска и управление визуализацией.

RunState неизменяем между командами: каждый обработчик принимает текущее
состояние и возвращает новое. Visualizer владеет массивом столбиков,
активным движком сортировки и RunState, применяет команды и выполняет
пошаговую часть кадра.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional

from bars import BarArray
from settings import *
from sorters import Algorithm, StepResult, make_engine

logger = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class Command(Enum):
    TOGGLE_RUN = "toggle_run"
    RESET_SORTED = "reset_sorted"
    SHUFFLE = "shuffle"
    PREV_ALGORITHM = "prev_algorithm"
    NEXT_ALGORITHM = "next_algorithm"
    FASTER = "faster"
    SLOWER = "slower"
    TOGGLE_PAUSE = "toggle_pause"
    QUIT = "quit"


@dataclass(frozen=True)
class RunState:
    algorithm: Algorithm = Algorithm.BUBBLE
    speed: int = DEFAULT_SPEED
    running: bool = False
    paused: bool = False
    finished: bool = False
    quit: bool = False

    @property
    def phase(self) -> Phase:
        if self.finished:
            return Phase.FINISHED
        if self.running and self.paused:
            return Phase.PAUSED
        if self.running:
            return Phase.RUNNING
        return Phase.IDLE


# ---------- PURE HANDLERS ----------

def toggle_run(state: RunState) -> RunState:
    """Старт/стоп. После завершения ничего не делает."""
    if state.finished:
        return state
    return replace(state, running=not state.running)


def toggle_pause(state: RunState) -> RunState:
    return replace(state, paused=not state.paused)


def adjust_speed(state: RunState, delta: int) -> RunState:
    """Меняет задержку шага, удерживая её в [SPEED_MIN, SPEED_MAX]."""
    speed = max(SPEED_MIN, min(SPEED_MAX, state.speed + delta))
    return replace(state, speed=speed)


def cycle_algorithm(state: RunState, direction: int) -> RunState:
    return replace(state, algorithm=state.algorithm.cycle(direction))


def fresh(state: RunState) -> RunState:
    """Сбрасывает флаги запуска (состояние IDLE)."""
    return replace(state, running=False, paused=False, finished=False)


def finish(state: RunState) -> RunState:
    return replace(state, running=False, finished=True)


def request_quit(state: RunState) -> RunState:
    return replace(state, quit=True)


class Visualizer:
    """
    Контроллер визуализации.

    Владеет:
        - массивом столбиков (BarArray);
        - движком активного алгоритма;
        - RunState (скорость, флаги, выбранный алгоритм).

    Примечания:
        - Массив меняет только активный движок во время шага и команды
          reset/shuffle/switch.
        - Команда QUIT лишь выставляет state.quit — завершает процесс
          главный цикл.
    """

    def __init__(
        self,
        size: int = BAR_COUNT,
        rng=None,
        state: Optional[RunState] = None,
        verify_every: int = VERIFY_EVERY,
    ):
        """
        Args:
            size: Количество столбиков.
            rng: Источник случайности для перемешивания (random.Random).
            state: Начальное состояние; по умолчанию Bubble Sort, IDLE.
            verify_every: Проверять перестановку каждые K шагов (0 — никогда).
        """
        self.bars = BarArray(size, rng=rng, observer=self._on_bars_event)
        self.state = state if state is not None else RunState()
        self._verify_every = max(0, verify_every)
        self.swaps = 0
        self.writes = 0

        self.bars.shuffle()
        self.engine = make_engine(self.state.algorithm, self.bars)

    # ---------- COMMANDS ----------

    def apply(self, command: Command) -> RunState:
        """
        Применяет команду управления и возвращает новое состояние.

        Args:
            command: Команда из клавиатурной раскладки.
        """
        before = self.state.phase
        state = self.state

        if command is Command.TOGGLE_RUN:
            state = toggle_run(state)
        elif command is Command.TOGGLE_PAUSE:
            state = toggle_pause(state)
        elif command is Command.FASTER:
            state = adjust_speed(state, -SPEED_STEP)
        elif command is Command.SLOWER:
            state = adjust_speed(state, SPEED_STEP)
        elif command is Command.RESET_SORTED:
            self.bars.reinitialize()
            state = self._restart(state)
        elif command is Command.SHUFFLE:
            self.bars.shuffle()
            state = self._restart(state)
        elif command in (Command.PREV_ALGORITHM, Command.NEXT_ALGORITHM):
            direction = -1 if command is Command.PREV_ALGORITHM else 1
            state = cycle_algorithm(state, direction)
            # при смене алгоритма массив всегда перемешивается заново
            self.bars.reinitialize()
            self.bars.shuffle()
            state = self._restart(state)
        elif command is Command.QUIT:
            state = request_quit(state)

        self.state = state
        logger.debug(f"{command.value}: {before.value} -> {state.phase.value}")
        return state

    def _restart(self, state: RunState) -> RunState:
        """Свежий движок выбранного алгоритма и сброшенные счётчики."""
        self.engine = make_engine(state.algorithm, self.bars)
        self.swaps = 0
        self.writes = 0
        return fresh(state)

    # ---------- FRAME ----------

    def frame(self) -> int:
        """
        Пошаговая часть кадра.

        Если состояние RUNNING — ровно один вызов advance() активного движка.

        Returns:
            Задержка до следующего кадра в мс: speed, если шаг выполнялся,
            иначе IDLE_DELAY_MS.
        """
        if self.state.phase is not Phase.RUNNING:
            return IDLE_DELAY_MS

        result = self.engine.advance()
        self._maybe_verify()
        if result is StepResult.FINISHED:
            self.state = finish(self.state)
            logger.info(
                f"{self.state.algorithm.title} finished: "
                f"{self.engine.steps} steps, {self.swaps} swaps, {self.writes} writes"
            )
        return self.state.speed

    def _maybe_verify(self) -> None:
        """
        По необходимости проверяет, что значения остаются перестановкой 1..N.

        Примечания:
            - Нарушение — ошибка программы, возбуждается AssertionError.
        """
        if self._verify_every and self.engine.steps % self._verify_every == 0:
            assert self.bars.is_permutation(), "Bar values are not a permutation"

    # ---------- STATS ----------

    def _on_bars_event(self, event: str, payload: dict) -> None:
        if event == "swap":
            self.swaps += 1
        elif event == "write":
            self.writes += 1

    def get_stats(self) -> Dict[str, int]:
        return {
            "steps": self.engine.steps,
            "swaps": self.swaps,
            "writes": self.writes,
        }
