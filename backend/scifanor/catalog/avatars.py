"""Initial-badge avatars for profiles without an uploaded photo."""
from typing import Optional

AVATAR_COLORS = (
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#FFA07A", "#98D8C8",
    "#F7DC6F", "#BB8FCE", "#85C1E2", "#F8B88B", "#FAD7A0",
    "#AED6F1", "#D7BDE2", "#A9DFBF", "#F9E79F", "#FADBD8",
    "#D5DBDB", "#85929E", "#5DADE2", "#48C9B0", "#F4D03F",
    "#EB984E", "#DC7633", "#A569BD", "#5499C7", "#52BE80",
    "#F8C471",
)

PLACEHOLDER_INITIAL = "?"


def initial_for(full_name: Optional[str]) -> str:
    """First letter of the name, upper-cased; ``?`` when there is no name."""
    if not full_name or not full_name.strip():
        return PLACEHOLDER_INITIAL
    return full_name.strip()[0].upper()


def avatar_color(initial: str) -> str:
    return AVATAR_COLORS[ord(initial[0]) % len(AVATAR_COLORS)]
