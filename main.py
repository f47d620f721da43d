"""
main.py — точка входа визуализатора сортировок (Sorting Visualizer).

Модуль создаёт окно Pygame, контроллер визуализации и UI, и запускает
главный цикл: опрос ввода -> команды -> один шаг сортировки -> отрисовка ->
задержка.
"""

import logging
import sys
import traceback

import pygame

from controller import Visualizer
from settings import *
from ui import UI, StartupError, create_surface


def run_loop(visualizer: Visualizer, ui: UI) -> None:
    """
    Главный цикл. Завершается, когда команда QUIT выставила state.quit.

    Примечания:
        - Ошибка Pygame при отрисовке (потеря окна/контекста) завершает цикл.
    """
    while not visualizer.state.quit:
        for command in ui.poll_commands():
            visualizer.apply(command)
            if visualizer.state.quit:
                return

        delay = visualizer.frame()

        try:
            ui.draw(visualizer.bars, visualizer.state, visualizer.get_stats())
        except pygame.error as pg_err:
            print(f"\n[ERROR] Ошибка Pygame при отрисовке: {pg_err}")
            traceback.print_exc()
            return

        ui.sleep(delay)


def main():
    """
    Точка входа приложения Sorting Visualizer.

    Основные задачи:
        1. Настроить логирование.
        2. Инициализировать Pygame и окно (ошибка — выход с кодом 1).
        3. Создать Visualizer (модель + движки) и UI (отрисовка, ввод).
        4. Запустить главный цикл.
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        screen = create_surface(WIDTH, HEIGHT)
    except StartupError as e:
        print(f" {e}")
        pygame.quit()
        sys.exit(1)

    print(" Pygame успешно инициализирован.")

    try:
        visualizer = Visualizer(BAR_COUNT)
        ui = UI(screen)
        run_loop(visualizer, ui)
    except KeyboardInterrupt:
        print("\n[INFO] Остановка по Ctrl+C")
    finally:
        # Гарантированное завершение Pygame
        pygame.quit()
        print(" Приложение завершено.")


if __name__ == "__main__":
    main()
