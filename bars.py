import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


class Role(Enum):
    """Роль столбика при отрисовке. На корректность сортировки не влияет."""

    IDLE = "idle"
    COMPARE = "compare"
    SWAPPED = "swapped"
    SORTED = "sorted"


# Роли, которые сбрасываются перед каждым шагом
TRANSIENT_ROLES = (Role.COMPARE, Role.SWAPPED)


@dataclass
class Bar:
    value: int
    role: Role = Role.IDLE


class BarArray:
    """
    Массив столбиков фиксированной длины N.

    Возможности:
        - Значения всегда образуют перестановку 1..N (между шагами).
        - Роли столбиков позиционные: swap() меняет только значения.
        - Observer-колбэк для подсчёта обменов и отладки.

    Примечания:
        - Длина массива не меняется после создания.
        - Генератор случайных чисел можно передать явно, чтобы
          перемешивание было воспроизводимым.
    """

    def __init__(
        self,
        size: int,
        rng: Optional[random.Random] = None,
        observer: Optional[Callable[[str, dict], None]] = None,
    ):
        """
        Создаёт массив и заполняет его значениями 1..size по возрастанию.

        Args:
            size: Количество столбиков (N >= 1).
            rng: Источник случайности для shuffle(); по умолчанию модуль random.
            observer: Колбэк наблюдателя: (event: str, payload: dict) -> None.

        Raises:
            ValueError: Если size < 1.
        """
        if size < 1:
            raise ValueError(f"BarArray size must be >= 1, got {size}")
        self._rng = rng if rng is not None else random
        self._observer = observer
        self.bars: List[Bar] = [Bar(i + 1) for i in range(size)]

    # ---------- PUBLIC API ----------

    def reinitialize(self) -> None:
        """Значения 1..N по порядку, все роли IDLE."""
        for i, bar in enumerate(self.bars):
            bar.value = i + 1
            bar.role = Role.IDLE
        self._notify("reinitialize", size=len(self.bars))

    def shuffle(self) -> None:
        """
        Равномерно перемешивает значения (Fisher–Yates из random.shuffle)
        и сбрасывает все роли в IDLE.
        """
        values = self.values()
        self._rng.shuffle(values)
        for bar, value in zip(self.bars, values):
            bar.value = value
            bar.role = Role.IDLE
        self._notify("shuffle", size=len(self.bars))

    def swap(self, i: int, j: int) -> None:
        """
        Меняет местами значения с индексами i и j. Роли не трогает.

        Args:
            i: Индекс первого элемента.
            j: Индекс второго элемента.
        """
        a, b = self.bars[i], self.bars[j]
        a.value, b.value = b.value, a.value
        self._notify("swap", i=i, j=j)

    def write(self, index: int, value: int) -> None:
        """
        Записывает значение в позицию (слияние пишет из вспомогательных копий).

        Args:
            index: Индекс позиции.
            value: Новое значение.
        """
        self.bars[index].value = value
        self._notify("write", index=index, value=value)

    def value(self, index: int) -> int:
        return self.bars[index].value

    def values(self) -> List[int]:
        """Копия значений в текущем порядке."""
        return [bar.value for bar in self.bars]

    def roles(self) -> List[Role]:
        """Копия ролей в текущем порядке."""
        return [bar.role for bar in self.bars]

    # ---------- ROLES ----------

    def compare_mark(self, *indices: int) -> None:
        for i in indices:
            self.bars[i].role = Role.COMPARE

    def swap_mark(self, *indices: int) -> None:
        for i in indices:
            self.bars[i].role = Role.SWAPPED

    def clear_marks(self) -> None:
        """Возвращает COMPARE/SWAPPED в IDLE. SORTED остаётся как есть."""
        for bar in self.bars:
            if bar.role in TRANSIENT_ROLES:
                bar.role = Role.IDLE

    def mark_all_sorted(self) -> None:
        for bar in self.bars:
            bar.role = Role.SORTED

    # ---------- VERIFICATION ----------

    def is_permutation(self) -> bool:
        """
        Проверяет, что значения образуют перестановку 1..N.

        Returns:
            True, если каждое число 1..N встречается ровно один раз.
        """
        return sorted(self.values()) == list(range(1, len(self.bars) + 1))

    def is_sorted(self) -> bool:
        values = self.values()
        return all(values[k] < values[k + 1] for k in range(len(values) - 1))

    # ---------- NOTIFICATIONS ----------

    def set_observer(self, fn: Optional[Callable[[str, Dict[str, Any]], None]]) -> None:
        """
        Устанавливает или снимает observer-колбэк.

        Args:
            fn: Функция-обработчик событий или None, чтобы отключить.
        """
        self._observer = fn

    def _notify(self, event: str, **payload: Any) -> None:
        """
        Безопасно вызывает observer.

        Примечания:
            - Исключения в observer подавляются и логируются на уровне debug,
              массив при этом остаётся в согласованном состоянии.
        """
        observer = self._observer
        if not observer:
            return
        try:
            observer(event, payload)
        except Exception as e:
            logger.debug(
                f"Observer callback failed for event '{event}': {e}",
                exc_info=True,
            )

    # ---------- PROTOCOLS ----------

    def __len__(self) -> int:
        return len(self.bars)

    def __getitem__(self, index: int) -> Bar:
        return self.bars[index]

    def __iter__(self) -> Iterator[Bar]:
        return iter(self.bars)

    def __repr__(self) -> str:
        return f"<BarArray {self.values()}>"
