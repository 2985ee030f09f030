CARD_STYLE_ORDER = ("Symbols", "Letters")
LOG_LEVEL_ORDER = ("DEBUG", "INFO", "WARNING", "ERROR")

TITLE = "NESTOR SOLITAIRE"

# Board snapshot image
FONT_NAMES = ("DejaVuSans-Bold.ttf", "Arial.ttf", "Helvetica.ttc")
TILE_W = 48
TILE_H = 64
TILE_GAP = 8
MARGIN = 16
EXTRA_ROW_GAP = 28

TABLE_COLOR = (27, 67, 50)
CARD_FILL = (247, 232, 188)
CARD_BORDER = (15, 23, 42)
EMPTY_FILL = (36, 86, 64)
EMPTY_OUTLINE = (153, 246, 228)
RED_SUIT = (190, 40, 40)
BLACK_SUIT = (35, 35, 45)
RED_SUITS = {0, 1}
