"""Resolve stored CSS color specs to something matplotlib can draw."""
import colorsys
import re

from matplotlib.colors import is_color_like, to_hex

from utils.constants import CHART_PALETTE

_HSL_RE = re.compile(
    r"^hsla?\(\s*(-?[\d.]+)(?:deg)?\s*[, ]\s*([\d.]+)%\s*[, ]\s*([\d.]+)%\s*(?:[,/]\s*[\d.]+%?\s*)?\)$",
    re.IGNORECASE,
)


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """hue in degrees, saturation/lightness in percent."""
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360.0, lightness / 100.0, saturation / 100.0)
    return to_hex((r, g, b))


def resolve_color(value: str | None, index: int = 0) -> str:
    """Return a matplotlib color for a CSS color string.

    '#hex' and named colors pass through, 'hsl(h, s%, l%)' is converted,
    anything else (e.g. 'hsl(var(--chart-1))') gets a palette color.
    """
    if value:
        spec = value.strip()
        match = _HSL_RE.match(spec)
        if match:
            h, s, l = (float(g) for g in match.groups())
            return hsl_to_hex(h, min(s, 100.0), min(l, 100.0))
        if is_color_like(spec):
            return spec
    return CHART_PALETTE[index % len(CHART_PALETTE)]
