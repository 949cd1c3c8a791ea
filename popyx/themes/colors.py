# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
One Dark inspired palette used for Rich markup and prompt_toolkit styles.

Plain hex values work in both libraries. The `_b` suffix marks the bold
variant of a colour, e.g. `OneColors.BLUE_b` → `"bold #61AFEF"`.
"""
from rich.style import Style
from rich.theme import Theme


class OneColors:
    BLACK = "#282C34"
    GUTTER_GREY = "#4B5263"
    COMMENT_GREY = "#5C6370"
    WHITE = "#ABB2BF"
    DARK_RED = "#BE5046"
    LIGHT_RED = "#E06C75"
    DARK_YELLOW = "#D19A66"
    LIGHT_YELLOW = "#E5C07B"
    GREEN = "#98C379"
    CYAN = "#56B6C2"
    BLUE = "#61AFEF"
    MAGENTA = "#C678DD"

    BLUE_b = f"bold {BLUE}"
    GREEN_b = f"bold {GREEN}"
    CYAN_b = f"bold {CYAN}"
    MAGENTA_b = f"bold {MAGENTA}"
    LIGHT_RED_b = f"bold {LIGHT_RED}"
    LIGHT_YELLOW_b = f"bold {LIGHT_YELLOW}"


def get_one_theme() -> Theme:
    """Named styles for popup elements, usable as `[popup.key]...[/]` markup."""
    return Theme(
        {
            "popup.heading": Style(color=OneColors.MAGENTA, bold=True),
            "popup.key": Style(color=OneColors.BLUE, bold=True),
            "popup.argument": Style(color=OneColors.COMMENT_GREY),
            "popup.argument.active": Style(color=OneColors.GREEN, bold=True),
            "popup.option.value": Style(color=OneColors.LIGHT_YELLOW),
            "popup.inapt": Style(color=OneColors.GUTTER_GREY, italic=True),
        }
    )
