from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from nestor.Core import COLUMNS, EXTRA_SLOTS, ROWS, Card
from nestor.ui_config import (
    BLACK_SUIT,
    CARD_BORDER,
    CARD_FILL,
    EMPTY_FILL,
    EMPTY_OUTLINE,
    EXTRA_ROW_GAP,
    FONT_NAMES,
    MARGIN,
    RED_SUIT,
    RED_SUITS,
    TABLE_COLOR,
    TILE_GAP,
    TILE_H,
    TILE_W,
)

HEARTS, DIAMONDS, CLUBS, SPADES = range(Card.SUIT_COUNT)


def load_font(size):
    for name in FONT_NAMES:
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


def suit_color(suit):
    return RED_SUIT if suit in RED_SUITS else BLACK_SUIT


def draw_suit(draw, suit, cx, cy, size):
    """Draws the pip of a suit centred on (cx, cy), size is its width."""
    fill = suit_color(suit)
    half = size // 2
    lobe = size // 3
    if suit == DIAMONDS:
        draw.polygon([(cx, cy - half), (cx + half, cy), (cx, cy + half), (cx - half, cy)], fill=fill)
    elif suit == HEARTS:
        draw.ellipse((cx - half, cy - lobe, cx, cy), fill=fill)
        draw.ellipse((cx, cy - lobe, cx + half, cy), fill=fill)
        draw.polygon([(cx - half, cy - lobe // 2), (cx + half, cy - lobe // 2), (cx, cy + half)], fill=fill)
    elif suit == SPADES:
        draw.polygon([(cx - half, cy + lobe // 2), (cx + half, cy + lobe // 2), (cx, cy - half)], fill=fill)
        draw.ellipse((cx - half, cy, cx, cy + lobe), fill=fill)
        draw.ellipse((cx, cy, cx + half, cy + lobe), fill=fill)
        draw.rectangle((cx - 1, cy + lobe // 2, cx + 1, cy + half), fill=fill)
    else:
        r = size // 4
        for ox, oy in ((-r, 0), (r, 0), (0, -r)):
            draw.ellipse((cx + ox - r, cy + oy - r, cx + ox + r, cy + oy + r), fill=fill)
        draw.rectangle((cx - 1, cy, cx + 1, cy + half), fill=fill)


def image_size():
    width = MARGIN * 2 + COLUMNS * TILE_W + (COLUMNS - 1) * TILE_GAP
    height = MARGIN * 2 + ROWS * TILE_H + (ROWS - 1) * TILE_GAP + EXTRA_ROW_GAP + TILE_H
    return width, height


def slot_origin(row, col):
    return MARGIN + col * (TILE_W + TILE_GAP), MARGIN + row * (TILE_H + TILE_GAP)


def extra_origin(idx):
    y = MARGIN + ROWS * (TILE_H + TILE_GAP) - TILE_GAP + EXTRA_ROW_GAP
    return MARGIN + idx * (TILE_W + TILE_GAP), y


def draw_slot(draw, x, y, card: Card, style, font, pip_font):
    if card is None:
        draw.rectangle((x, y, x + TILE_W - 1, y + TILE_H - 1), fill=EMPTY_FILL, outline=EMPTY_OUTLINE, width=1)
        return
    draw.rectangle((x, y, x + TILE_W - 1, y + TILE_H - 1), fill=CARD_FILL, outline=CARD_BORDER, width=2)
    color = suit_color(card.suit)
    draw.text((x + 5, y + 3), Card.NUMS[card.rank], fill=color, font=font)
    cx, cy = x + TILE_W // 2, y + TILE_H // 2 + 6
    if style == "Letters":
        letter = Card.SUIT_GLYPHS["Letters"][card.suit]
        left, top, right, bottom = draw.textbbox((0, 0), letter, font=pip_font)
        draw.text((cx - (left + right) // 2, cy - (top + bottom) // 2), letter, fill=color, font=pip_font)
    else:
        draw_suit(draw, card.suit, cx, cy, TILE_W // 3)


def render_board(board, style="Symbols") -> Image.Image:
    img = Image.new("RGB", image_size(), TABLE_COLOR)
    d = ImageDraw.Draw(img)
    font = load_font(14)
    pip_font = load_font(18)
    for row in range(ROWS):
        for col in range(COLUMNS):
            x, y = slot_origin(row, col)
            draw_slot(d, x, y, board.grid[row][col], style, font, pip_font)
    for idx in range(EXTRA_SLOTS):
        x, y = extra_origin(idx)
        draw_slot(d, x, y, board.extra[idx], style, font, pip_font)
    return img


def save_board_image(board, path, style="Symbols") -> Path:
    out_path = Path(path).expanduser()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    render_board(board, style).save(out_path, format="PNG")
    return out_path
