from typing import Dict, List, Optional, Tuple

import pygame

from bars import BarArray, Role
from controller import Command, RunState
from settings import *

ROLE_COLORS = {
    Role.IDLE: IDLE_COLOR,
    Role.COMPARE: COMPARE_COLOR,
    Role.SWAPPED: SWAP_COLOR,
    Role.SORTED: SORTED_COLOR,
}

KEYMAP = {
    pygame.K_SPACE: Command.TOGGLE_RUN,
    pygame.K_r: Command.RESET_SORTED,
    pygame.K_s: Command.SHUFFLE,
    pygame.K_LEFT: Command.PREV_ALGORITHM,
    pygame.K_RIGHT: Command.NEXT_ALGORITHM,
    pygame.K_UP: Command.FASTER,
    pygame.K_DOWN: Command.SLOWER,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_ESCAPE: Command.QUIT,
}

HELP_LINE = "[Space] Run  [P] Pause  [R] Reset  [S] Shuffle  [</>] Algo  [Up/Down] Speed  [Esc] Quit"


class StartupError(Exception):
    """Не удалось создать окно/поверхность для отрисовки."""


def create_surface(width: int = WIDTH, height: int = HEIGHT) -> pygame.Surface:
    """
    Инициализирует Pygame и создаёт окно.

    Args:
        width: Ширина окна.
        height: Высота окна.

    Raises:
        StartupError: Если SDL или окно создать не удалось.
    """
    try:
        pygame.init()
        screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    except pygame.error as e:
        raise StartupError(f"Failed to initialize SDL or window: {e}") from e
    pygame.display.set_caption("Sorting Visualizer")
    return screen


def translate_event(event) -> Optional[Command]:
    """Переводит событие Pygame в команду (или None, если событие не наше)."""
    if event.type == pygame.QUIT:
        return Command.QUIT
    if event.type == pygame.KEYDOWN:
        return KEYMAP.get(event.key)
    return None


def bar_rect(index: int, value: int, count: int, size: Tuple[int, int]) -> pygame.Rect:
    """
    Прямоугольник столбика: N столбиков равной ширины на всю ширину
    поверхности, высота пропорциональна значению (максимум — всё
    пространство под отступом TOP_MARGIN).
    """
    w, h = size
    usable = max(1, h - TOP_MARGIN)
    x0 = index * w // count
    x1 = (index + 1) * w // count
    height = value * usable // count
    # 1px зазор между столбиками
    return pygame.Rect(x0, h - height, max(1, x1 - x0 - 1), height)


class UI:
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.font = None
        if pygame.font.get_init():
            self.font = pygame.font.SysFont(HUD_FONT, HUD_FONT_SIZE)
        self._caption = None

    def poll_commands(self) -> List[Command]:
        """Неблокирующе забирает все события кадра и переводит их в команды."""
        commands = []
        for event in pygame.event.get():
            command = translate_event(event)
            if command is not None:
                commands.append(command)
        return commands

    def draw(self, bars: BarArray, state: RunState, stats: Optional[Dict[str, int]] = None) -> None:
        """Рендер кадра и вывод на экран."""
        self.render(bars, state, stats)
        pygame.display.flip()

    def render(self, bars: BarArray, state: RunState, stats: Optional[Dict[str, int]] = None) -> None:
        surf = self.screen
        surf.fill(BG_COLOR)

        size = surf.get_size()
        n = len(bars)
        for i, bar in enumerate(bars):
            pygame.draw.rect(surf, ROLE_COLORS[bar.role], bar_rect(i, bar.value, n, size))

        self._draw_info_text(state, stats or {})

    def _draw_info_text(self, state: RunState, stats: Dict[str, int]) -> None:
        caption = f"Sorting Visualizer - {state.algorithm.title}"
        if caption != self._caption and pygame.display.get_init():
            pygame.display.set_caption(caption)
            self._caption = caption

        if self.font is None:
            return

        line = (
            f"{state.algorithm.title}  |  {state.phase.name}  |  speed {state.speed} ms"
            f"  |  steps {stats.get('steps', 0)}  swaps {stats.get('swaps', 0)}"
        )
        self.screen.blit(self.font.render(line, True, TEXT_COLOR), (10, 2))
        self.screen.blit(self.font.render(HELP_LINE, True, TEXT_COLOR), (10, 20))

    @staticmethod
    def sleep(ms: int) -> None:
        pygame.time.wait(ms)
