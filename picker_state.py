"""
State of the color picker as an immutable value.

Every function takes a PickerState and returns a new one; the caller owns the
current instance and re-renders from it.
"""
import logging
from dataclasses import dataclass, replace

from color_logic import (HSL, RGB, NamedPalette, describe_color, hex_to_rgb, hsl_to_hex,
                         normalize_hex, random_palette, rgb_to_hex, rgb_to_hsl)
from errors import InvalidFormat
from settings import DEFAULT_SETTINGS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickerState:
    color: str
    rgb: RGB
    hsl: HSL
    selected: tuple = ()
    saved_palettes: tuple = ()
    history: tuple = ()
    suggested: NamedPalette = None
    history_size: int = DEFAULT_SETTINGS["history_size"]

    @property
    def info(self):
        return describe_color(self.color)


def initial_state(color=None, settings=None):
    settings = settings or DEFAULT_SETTINGS
    color = normalize_hex(color or settings["default_color"])
    return PickerState(
        color=color,
        rgb=hex_to_rgb(color),
        hsl=rgb_to_hsl(*hex_to_rgb(color)),
        history=_recent((color,), settings["history_size"]),
        history_size=settings["history_size"],
    )

def _recent(history, size):
    # history[-0:] would keep everything
    return history[-size:] if size > 0 else ()

def _with_color(state, hex_val):
    rgb = hex_to_rgb(hex_val)
    history = state.history
    if not history or history[-1] != hex_val:
        history = _recent(history + (hex_val,), state.history_size)
    return replace(state, color=hex_val, rgb=rgb, hsl=rgb_to_hsl(*rgb), history=history)

def set_color(state, hex_val):
    """
    Switch to hex_val. A malformed value is ignored and the current color kept.
    """
    try:
        hex_val = normalize_hex(hex_val)
    except InvalidFormat as e:
        logger.debug("Keeping %s: %s", state.color, e)
        return state
    return _with_color(state, hex_val)

def set_rgb_channel(state, key, value):
    if key not in RGB._fields:
        raise ValueError(f"RGB channel must be one of {RGB._fields}, got {key!r}")
    rgb = state.rgb._replace(**{key: value})
    return _with_color(state, rgb_to_hex(*rgb))

def set_hsl_channel(state, key, value):
    """
    Edit hue, saturation or lightness. The stored HSL is recomputed from the
    resulting color, so it may differ from the value passed in by rounding.
    """
    if key not in HSL._fields:
        raise ValueError(f"HSL channel must be one of {HSL._fields}, got {key!r}")
    hsl = state.hsl._replace(**{key: value})
    return _with_color(state, hsl_to_hex(*hsl))

def toggle_selected(state, color):
    color = normalize_hex(color)
    if color in state.selected:
        selected = tuple(c for c in state.selected if c != color)
    else:
        selected = state.selected + (color,)
    return replace(state, selected=selected)

def save_palette(state):
    """
    Store the selected colors (or the current color if none are selected)
    as 'Palette N' and clear the selection.
    """
    colors = state.selected or (state.color,)
    palette = NamedPalette(f"Palette {len(state.saved_palettes) + 1}", colors)
    return replace(state, saved_palettes=state.saved_palettes + (palette,), selected=())

def remove_palette(state, index):
    palettes = tuple(p for i, p in enumerate(state.saved_palettes) if i != index)
    return replace(state, saved_palettes=palettes)

def suggest_random_palette(state, rng=None):
    return replace(state, suggested=random_palette(rng))
