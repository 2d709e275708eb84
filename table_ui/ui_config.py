RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
COLORS = ("BLACK", "RED")
COLOR_LETTERS = ("B", "R")

PILE_LABELS = {
    "draw": "DRW",
    "tableau": "TAB",
    "foundation": "DEP",
}

CELL_WIDTH = 3
HIDDEN_MARKER = "X"
PROMPT = "esp> "

# board image
IMG_CARD_W = 72
IMG_CARD_H = 100
IMG_GAP = 14
IMG_STEP = 26
IMG_MARGIN = 20
IMG_HEADER = 28
IMG_THEME = {
    "bg": (27, 67, 50),
    "header_text": (241, 245, 249),
    "card_front": (250, 250, 245),
    "card_back": (37, 99, 235),
    "card_border": (30, 41, 59),
    "slot_outline": (74, 124, 98),
    "black_ink": (17, 24, 39),
    "red_ink": (220, 38, 38),
    "back_pattern": (191, 219, 254),
}
