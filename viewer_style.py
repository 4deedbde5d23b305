# viewer_style.py
# Shared colours and fonts for the BMP viewer

BG_MAIN = "#eef1f5"
BG_TOOLBAR = "#2f3b4c"
BG_PANEL = "#ffffff"
BG_BUTTON = "#4a6fa5"
FG_BUTTON = "#ffffff"

FG_TEXT = "#1f2933"
FG_SUBTEXT = "#5f6b7a"

FONT_HEADER = ("Segoe UI", 11, "bold")
FONT_TEXT = ("Segoe UI", 10)
FONT_MONO = ("Consolas", 9)
FONT_BUTTON = ("Segoe UI", 10, "bold")
