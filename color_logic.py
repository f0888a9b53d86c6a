import colorsys
import math
import random
import re
from collections import namedtuple

from errors import InvalidFormat

RGB = namedtuple("RGB", ["r", "g", "b"])
HSL = namedtuple("HSL", ["h", "s", "l"])
ColorInfo = namedtuple("ColorInfo", ["hex", "rgb", "hsl"])
NamedPalette = namedtuple("NamedPalette", ["name", "colors"])

HEX_PATTERN = re.compile(r"#[0-9a-fA-F]{6}")

# complementary, analogous +30, analogous -30, triadic +120, triadic +240
PALETTE_OFFSETS = (180, 30, 330, 120, 240)

HARMONY_ORDER = ["Monochromatic", "Analogous", "Complementary",
                 "Split Complementary", "Triadic", "Tetradic"]


def _round(x):
    # Halves round up, unlike round() which rounds them to even.
    return int(math.floor(x + 0.5))

def _clamp(value, lo, hi):
    return max(lo, min(hi, value))

def normalize_hex(hex_str):
    """
    Validate a '#RRGGBB' string and return it lowercased.
    """
    if not isinstance(hex_str, str) or not HEX_PATTERN.fullmatch(hex_str):
        raise InvalidFormat(f"Expected '#RRGGBB', got {hex_str!r}", value=hex_str)
    return hex_str.lower()

def hex_to_rgb(hex_str):
    """
    Convert '#RRGGBB' to RGB (0-255).
    """
    hex_str = normalize_hex(hex_str)
    return RGB(*(int(hex_str[i:i+2], 16) for i in (1, 3, 5)))

def rgb_to_hex(r, g, b):
    channels = (_clamp(_round(c), 0, 255) for c in (r, g, b))
    return "#" + "".join(f"{c:02x}" for c in channels)

def rgb_to_hsl(r, g, b, rounded=True):
    """
    Convert RGB (0-255) to HSL (degrees, percent, percent).

    With rounded=False the raw float values are returned, which is what
    palette generation works with.
    """
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    h, s, l = h * 360, s * 100, l * 100
    if not rounded:
        return HSL(h, s, l)
    return HSL(_round(h) % 360, _round(s), _round(l))

def hsl_to_rgb(h, s, l):
    """
    Convert HSL (degrees, percent, percent) to RGB (0-255).
    """
    h = (h % 360) / 360.0
    s = _clamp(s, 0, 100) / 100.0
    l = _clamp(l, 0, 100) / 100.0
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    # Clamp values to 0-255 in case of float errors
    return RGB(*(_clamp(_round(c * 255), 0, 255) for c in (r, g, b)))

def hsl_to_hex(h, s, l):
    return rgb_to_hex(*hsl_to_rgb(h, s, l))

def rgb_to_rgb_string(r, g, b):
    return f"rgb({r}, {g}, {b})"

def rgb_to_hsl_string(r, g, b):
    h, s, l = rgb_to_hsl(r, g, b)
    return f"hsl({h}, {s}%, {l}%)"

def describe_color(hex_str):
    """
    Display strings for a color: hex, rgb(...) and hsl(...).
    """
    rgb = hex_to_rgb(hex_str)
    return ColorInfo(normalize_hex(hex_str), rgb_to_rgb_string(*rgb), rgb_to_hsl_string(*rgb))

def rotate_hue(h, degrees):
    """
    Rotate hue by degrees.
    """
    return (h + degrees) % 360

def generate_palette(base):
    """
    Six colors derived from base, in this order:
    base, complementary, analogous +30, analogous -30, triadic +120, triadic +240.
    Saturation and lightness are kept, only the hue moves.
    """
    base = normalize_hex(base)
    h, s, l = rgb_to_hsl(*hex_to_rgb(base), rounded=False)
    derived = [hsl_to_hex(rotate_hue(h, offset), s, l) for offset in PALETTE_OFFSETS]
    return tuple([base] + derived)

def random_color(rng=None):
    """
    Uniformly random 24-bit color as '#rrggbb'.
    """
    rng = rng or random
    return f"#{rng.randrange(0x1000000):06x}"

def random_palette(rng=None):
    return NamedPalette("Random", generate_palette(random_color(rng)))

def get_monochromatic(h, s, l):
    """
    Monochromatic (5 tones + shades)
    Modify L (lightness).
    """
    return [(h, s, _clamp(l + delta, 0.0, 100.0)) for delta in (-30, -15, 0, 15, 30)]

def get_analogous(h, s, l):
    """
    Analogous (±30° hue shift)
    Returns: [base, +30, -30]
    """
    return [(h, s, l), (rotate_hue(h, 30), s, l), (rotate_hue(h, -30), s, l)]

def get_complementary(h, s, l):
    return [(h, s, l), (rotate_hue(h, 180), s, l)]

def get_split_complementary(h, s, l):
    """
    Split-Complementary (180° ± 30°)
    Returns: [base, split1, split2]
    """
    opp = rotate_hue(h, 180)
    return [(h, s, l), (rotate_hue(opp, 30), s, l), (rotate_hue(opp, -30), s, l)]

def get_triadic(h, s, l):
    """
    Triadic (±120°)
    Returns: [base, +120, -120]
    """
    return [(h, s, l), (rotate_hue(h, 120), s, l), (rotate_hue(h, -120), s, l)]

def get_tetradic(h, s, l):
    """
    Tetradic (Rectangle scheme)
    c1 = h
    c2 = rotate_hue(h, 180)
    c3 = rotate_hue(h, 60)
    c4 = rotate_hue(c2, 60)
    """
    c2 = rotate_hue(h, 180)
    return [(h, s, l), (c2, s, l), (rotate_hue(h, 60), s, l), (rotate_hue(c2, 60), s, l)]

def generate_harmonies(base):
    """
    Named harmony schemes for base, each a list of hex strings.
    """
    h, s, l = rgb_to_hsl(*hex_to_rgb(base), rounded=False)

    schemes = {
        "Monochromatic": get_monochromatic(h, s, l),
        "Analogous": get_analogous(h, s, l),
        "Complementary": get_complementary(h, s, l),
        "Split Complementary": get_split_complementary(h, s, l),
        "Triadic": get_triadic(h, s, l),
        "Tetradic": get_tetradic(h, s, l),
    }

    return {name: [hsl_to_hex(*hsl) for hsl in schemes[name]] for name in HARMONY_ORDER}
