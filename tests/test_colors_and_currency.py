from utils.colors import hsl_to_hex, resolve_color
from utils.constants import CHART_PALETTE
from utils.currency import currency_symbol, format_currency, format_signed


def test_hsl_conversion():
    assert hsl_to_hex(0, 100, 50) == '#ff0000'
    assert hsl_to_hex(120, 100, 25) == '#008000'
    assert resolve_color('hsl(0, 0%, 100%)') == '#ffffff'


def test_hex_and_named_colors_pass_through():
    assert resolve_color('#2A9D90') == '#2A9D90'
    assert resolve_color('tomato') == 'tomato'


def test_unresolvable_colors_use_palette():
    assert resolve_color('hsl(var(--chart-1))', 0) == CHART_PALETTE[0]
    assert resolve_color(None, 1) == CHART_PALETTE[1]
    assert resolve_color('', len(CHART_PALETTE) + 2) == CHART_PALETTE[2]


def test_currency_formatting():
    assert format_currency(1234.5, 'EUR') == '€1,234.50'
    assert format_currency(None, 'EUR') == 'N/A'
    assert format_signed(-12, 'GBP') == '-£12.00'
    assert format_signed(3, 'USD') == '+$3.00'
    assert currency_symbol('XYZ') == 'XYZ'
