"""
sorters.py — пошаговые движки сортировок.

Каждый алгоритм разложен на возобновляемую операцию advance(): один вызов
выполняет одну ограниченную порцию работы (сравнение, проход, разбиение)
и соответствует одному кадру анимации. Состояние курсоров хранится в самом
движке между вызовами.

Общий контракт движка:
    reset()   — вернуть курсоры в начальное состояние;
    advance() — выполнить один шаг, вернуть StepResult.

Перед каждым шагом временные роли (COMPARE/SWAPPED) сбрасываются, так что
подсвечен только текущий шаг. Когда движок возвращает FINISHED, все столбики
уже помечены SORTED; повторные вызовы после завершения ничего не меняют.
"""

from enum import Enum, IntEnum
from typing import Dict, List, Tuple

from bars import BarArray


class StepResult(Enum):
    CONTINUES = "continues"
    FINISHED = "finished"


class Algorithm(IntEnum):
    BUBBLE = 0
    SELECTION = 1
    INSERTION = 2
    MERGE = 3
    QUICK = 4

    @property
    def title(self) -> str:
        return ALGORITHM_TITLES[self]

    def cycle(self, direction: int) -> "Algorithm":
        """Следующий/предыдущий алгоритм по кругу."""
        return Algorithm((self.value + direction) % len(Algorithm))


ALGORITHM_TITLES = {
    Algorithm.BUBBLE: "Bubble Sort",
    Algorithm.SELECTION: "Selection Sort",
    Algorithm.INSERTION: "Insertion Sort",
    Algorithm.MERGE: "Merge Sort",
    Algorithm.QUICK: "Quick Sort",
}


def _finish(bars: BarArray) -> StepResult:
    bars.mark_all_sorted()
    return StepResult.FINISHED


class BubbleSort:
    """Один шаг — одно сравнение соседней пары (и обмен, если нужно)."""

    def __init__(self, bars: BarArray):
        self.bars = bars
        self.reset()

    def reset(self) -> None:
        self.i = 0
        self.j = 0
        self.steps = 0

    def _done(self) -> bool:
        return self.i >= len(self.bars) - 1

    def advance(self) -> StepResult:
        bars = self.bars
        if self._done():
            return _finish(bars)

        bars.clear_marks()
        j = self.j
        bars.compare_mark(j, j + 1)
        # строго '>' — равные не меняются местами
        if bars.value(j) > bars.value(j + 1):
            bars.swap(j, j + 1)
            bars.swap_mark(j, j + 1)

        self.j += 1
        if self.j >= len(bars) - self.i - 1:
            self.i += 1
            self.j = 0
        self.steps += 1

        if self._done():
            return _finish(bars)
        return StepResult.CONTINUES


class SelectionSort:
    """
    Один шаг — полный просмотр неотсортированного хвоста и один обмен.

    Внутренний цикл намеренно не дробится на отдельные кадры.
    """

    def __init__(self, bars: BarArray):
        self.bars = bars
        self.reset()

    def reset(self) -> None:
        self.i = 0
        self.min_index = 0
        self.steps = 0

    def _done(self) -> bool:
        return self.i >= len(self.bars) - 1

    def advance(self) -> StepResult:
        bars = self.bars
        if self._done():
            return _finish(bars)

        bars.clear_marks()
        i = self.i
        m = i
        for j in range(i + 1, len(bars)):
            bars.compare_mark(j)
            # при равенстве остаётся первое вхождение
            if bars.value(j) < bars.value(m):
                m = j
        self.min_index = m

        if m != i:
            bars.swap(i, m)
        bars.swap_mark(i)

        self.i += 1
        self.steps += 1

        if self._done():
            return _finish(bars)
        return StepResult.CONTINUES


class InsertionSort:
    """Один шаг — вставка очередного элемента в отсортированный префикс."""

    def __init__(self, bars: BarArray):
        self.bars = bars
        self.reset()

    def reset(self) -> None:
        self.i = 1
        self.j = 1
        self.steps = 0

    def _done(self) -> bool:
        return self.i >= len(self.bars)

    def advance(self) -> StepResult:
        bars = self.bars
        if self._done():
            return _finish(bars)

        bars.clear_marks()
        j = self.i
        while j > 0 and bars.value(j - 1) > bars.value(j):
            bars.swap(j, j - 1)
            bars.swap_mark(j, j - 1)
            j -= 1
        self.j = j
        bars.compare_mark(self.i)

        self.i += 1
        self.steps += 1

        if self._done():
            return _finish(bars)
        return StepResult.CONTINUES


class MergeSort:
    """
    Восходящая (итеративная) сортировка слиянием.

    Один шаг — полный проход, сливающий все соседние блоки текущей ширины
    width; после прохода ширина удваивается. Слияние устойчивое: при
    равенстве берётся элемент левого блока.
    """

    def __init__(self, bars: BarArray):
        self.bars = bars
        self.reset()

    def reset(self) -> None:
        self.width = 1
        self.steps = 0

    def _done(self) -> bool:
        return self.width >= len(self.bars)

    def advance(self) -> StepResult:
        bars = self.bars
        if self._done():
            return _finish(bars)

        bars.clear_marks()
        n = len(bars)
        for left in range(0, n, 2 * self.width):
            mid = min(left + self.width, n)
            right = min(left + 2 * self.width, n)
            if mid < right:
                self._merge(left, mid, right)

        self.width *= 2
        self.steps += 1

        if self._done():
            return _finish(bars)
        return StepResult.CONTINUES

    def _merge(self, left: int, mid: int, right: int) -> None:
        """Сливает [left, mid) и [mid, right) на месте через копии блоков."""
        bars = self.bars
        lo = [bars.value(k) for k in range(left, mid)]
        hi = [bars.value(k) for k in range(mid, right)]

        i = j = 0
        k = left
        while i < len(lo) and j < len(hi):
            bars.compare_mark(k)
            if lo[i] <= hi[j]:
                bars.write(k, lo[i])
                i += 1
            else:
                bars.write(k, hi[j])
                j += 1
            k += 1

        for value in lo[i:] + hi[j:]:
            bars.write(k, value)
            k += 1


class QuickSort:
    """
    Итеративная быстрая сортировка с явным стеком диапазонов.

    Разбиение Ломуто, опорный элемент — последний в диапазоне. Один шаг —
    снять верхний диапазон и полностью разбить его; подзадачи
    (low, p - 1) и (p + 1, high) кладутся на стек. Диапазоны из одного
    элемента и пустые отбрасываются без траты шага.
    """

    def __init__(self, bars: BarArray):
        self.bars = bars
        self.reset()

    def reset(self) -> None:
        self.stack: List[Tuple[int, int]] = [(0, len(self.bars) - 1)]
        self.steps = 0

    def _drop_trivial(self) -> None:
        while self.stack and self.stack[-1][0] >= self.stack[-1][1]:
            self.stack.pop()

    def _finish(self) -> StepResult:
        self.stack.clear()
        return _finish(self.bars)

    def advance(self) -> StepResult:
        self._drop_trivial()
        if not self.stack:
            return self._finish()

        self.bars.clear_marks()
        low, high = self.stack.pop()
        p = self._partition(low, high)
        self.stack.append((low, p - 1))
        self.stack.append((p + 1, high))
        self.steps += 1

        if not any(lo < hi for lo, hi in self.stack):
            return self._finish()
        return StepResult.CONTINUES

    def _partition(self, low: int, high: int) -> int:
        """
        Разбиение Ломуто диапазона [low, high].

        Returns:
            Итоговый индекс опорного элемента.
        """
        bars = self.bars
        pivot = bars.value(high)
        i = low - 1
        for j in range(low, high):
            bars.compare_mark(j)
            if bars.value(j) < pivot:
                i += 1
                if i != j:
                    bars.swap(i, j)
                bars.swap_mark(i, j)

        p = i + 1
        if p != high:
            bars.swap(p, high)
        bars.swap_mark(p)
        return p


ENGINES: Dict[Algorithm, type] = {
    Algorithm.BUBBLE: BubbleSort,
    Algorithm.SELECTION: SelectionSort,
    Algorithm.INSERTION: InsertionSort,
    Algorithm.MERGE: MergeSort,
    Algorithm.QUICK: QuickSort,
}


def make_engine(algorithm: Algorithm, bars: BarArray):
    """Создаёт движок выбранного алгоритма в начальном состоянии."""
    return ENGINES[algorithm](bars)
