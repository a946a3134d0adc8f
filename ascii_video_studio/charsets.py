"""Character ramps, ordered from dense/dark to sparse/light."""

from typing import Dict

# Space is always the blank glyph, wherever it sits in a ramp
BLANK = " "

CHARSETS: Dict[str, str] = {
    "standard": "@%#*+=-:. ",  # Classic gradient
    "detailed": "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. ",
    "medium": "MWN@#&Q$%9876543210?!abc;:+=-,._ ",
    "blocks": "█▓▒░ .",
    "shapes": "#XOxo-.' ",
    "box": "█▓▒░│║─═╔╗╚╝┌┐└┘├┤┬┴┼ ",
}

DEFAULT_CHARSET = CHARSETS["standard"]


def resolve_charset(value: str) -> str:
    """Return the preset called `value`, or `value` itself as a literal ramp.

    Preset names match exactly, so a ramp such as "Box" stays a ramp.
    """
    return CHARSETS.get(value, value)
