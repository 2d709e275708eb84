from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from table_ui.ui_config import (
    COLOR_LETTERS,
    IMG_CARD_H,
    IMG_CARD_W,
    IMG_GAP,
    IMG_HEADER,
    IMG_MARGIN,
    IMG_STEP,
    IMG_THEME,
    PILE_LABELS,
    RANKS,
)
from table_ui.view_model import BoardViewModel, CardView


def get_font(size):
    for name in ("DejaVuSans-Bold.ttf", "Arial.ttf", "Helvetica.ttc"):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


def image_size(vm: BoardViewModel) -> tuple[int, int]:
    cols = len(vm.piles)
    w = IMG_MARGIN * 2 + cols * IMG_CARD_W + (cols - 1) * IMG_GAP
    h = IMG_MARGIN * 2 + IMG_HEADER + IMG_CARD_H + max(0, vm.depth - 1) * IMG_STEP
    return w, h


def draw_card(draw, x, y, card: CardView, font, theme=IMG_THEME):
    box = (x, y, x + IMG_CARD_W, y + IMG_CARD_H)
    if not card.face_up:
        draw.rounded_rectangle(box, radius=6, fill=theme["card_back"], outline=theme["card_border"])
        for i in range(4):
            yy = y + 12 + i * (IMG_CARD_H - 24) // 3
            draw.line((x + 10, yy, x + IMG_CARD_W - 10, yy), fill=theme["back_pattern"], width=1)
        return
    ink = theme["red_ink"] if card.color == 1 else theme["black_ink"]
    draw.rounded_rectangle(box, radius=6, fill=theme["card_front"], outline=theme["card_border"])
    label = COLOR_LETTERS[card.color] + RANKS[card.rank]
    draw.text((x + 6, y + 4), label, fill=ink, font=font)
    tw = draw.textlength(RANKS[card.rank], font=font)
    draw.text((x + (IMG_CARD_W - tw) / 2, y + IMG_CARD_H // 2), RANKS[card.rank], fill=ink, font=font)


def render_image(vm: BoardViewModel, theme=IMG_THEME) -> Image.Image:
    img = Image.new("RGB", image_size(vm), theme["bg"])
    draw = ImageDraw.Draw(img)
    font = get_font(14)
    for col, pile in enumerate(vm.piles):
        x = IMG_MARGIN + col * (IMG_CARD_W + IMG_GAP)
        draw.text((x, IMG_MARGIN), f"{pile.number} {PILE_LABELS[pile.kind]}", fill=theme["header_text"], font=font)
        y0 = IMG_MARGIN + IMG_HEADER
        if not pile.cards:
            draw.rounded_rectangle((x, y0, x + IMG_CARD_W, y0 + IMG_CARD_H), radius=6, outline=theme["slot_outline"], width=2)
            continue
        for row, card in enumerate(pile.cards):
            draw_card(draw, x, y0 + row * IMG_STEP, card, font, theme)
    return img


def save_board_image(vm: BoardViewModel, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    render_image(vm).save(path, format="PNG")
    return path
