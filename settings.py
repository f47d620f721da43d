# Размеры окна
WIDTH = 1000
HEIGHT = 600

# Количество столбиков (N)
BAR_COUNT = 100

# Отступ сверху под строку состояния
TOP_MARGIN = 40

# Цвета (RGB)
BG_COLOR = (30, 30, 30)
TEXT_COLOR = (230, 230, 230)

# Цвета ролей столбиков
IDLE_COLOR = (0, 153, 255)
COMPARE_COLOR = (255, 153, 0)
SWAP_COLOR = (255, 51, 51)
SORTED_COLOR = (0, 255, 102)

# Скорость: задержка между шагами в мс (меньше = быстрее)
DEFAULT_SPEED = 15
SPEED_MIN = 1
SPEED_MAX = 100
SPEED_STEP = 5

# Задержка кадра, когда сортировка не идёт (мс)
IDLE_DELAY_MS = 10

# Шрифт строки состояния
HUD_FONT = "consolas"
HUD_FONT_SIZE = 16

# Логирование
LOG_LEVEL = "INFO"

# Проверка инварианта массива каждые K шагов (0 — без проверок)
VERIFY_EVERY = 0
