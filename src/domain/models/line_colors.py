from __future__ import annotations

import logging
from types import MappingProxyType

logger = logging.getLogger(__name__)

# Empty colour lets GTFS consumers pick their own default.
DEFAULT_COLOR = ""

# Modes with a single colour for every line.
MODE_COLORS = MappingProxyType(
    {
        "dlr": "00AFAD",
        "overground": "E86A10",
        "tflrail": "0019A8",
    }
)

# Modes coloured per line name (colours as published on tfl.gov.uk).
LINE_COLORS = MappingProxyType(
    {
        "tube": {
            "Bakerloo": "894E24",
            "Central": "DC241F",
            "Circle": "FFCE00",
            "District": "007229",
            "Hammersmith & City": "D799AF",
            "Jubilee": "6A7278",
            "Metropolitan": "751056",
            "Northern": "000",
            "Piccadilly": "0019A8",
            "Victoria": "00A0E2",
            "Waterloo & City": "76D0BD",
        },
        "tram": {
            "Tram 1": "C6D834",
            "Tram 2": "C6D834",
            "Tram 3": "79C23F",
            "Tram 4": "336B14",
        },
        "national-rail": {
            "South West Trains": "F11815",
            "Southeastern": "0071BF",
            "Southern": "00A74B",
            "Great Northern": "00A6E2",
            "Arriva Trains Wales": "00B9B4",
            "c2c": "F0188C",
            "Chiltern Railways": "B389C1",
            "Cross Country": "A03467",
            "East Midlands Trains": "E16C16",
            "First Great Western": "2D2B94",
            "First Hull Trains": "1B903F",
            "First TransPennine Express": "F265A0",
            "Gatwick Express": "231F20",
            "Grand Central": "3F3F40",
            "Greater Anglia": "8B8FA5",
            "Heathrow Connect": "F6858D",
            "Heathrow Express": "55C4BF",
            "Island Line": "F8B174",
            "London Midland": "8BC831",
            "Merseyrail": "FEC95F",
            "Northern Rail": "0569A8",
            "ScotRail": "96A3A9",
            "Thameslink": "DA4290",
            "Virgin Trains": "A8652C",
            "Virgin Trains East Coast": "9C0101",
        },
        "river-bus": {
            "RB1": "2D3039",
            "RB2": "0072BC",
            "RB4": "61C29D",
            "RB5": "BA6830",
            "RB6": "DF64B0",
            "Woolwich Ferry": "F7931D",
        },
        "cable-car": {
            "Emirates Air Line": "E51937",
        },
    }
)

MODE_ALIASES = MappingProxyType({"river-ferry": "river-bus"})


def line_color(mode_name: str, line_name: str) -> str:
    """Hex colour (no '#') for a line, or DEFAULT_COLOR when unknown."""

    if mode_name in MODE_COLORS:
        return MODE_COLORS[mode_name]

    by_name = LINE_COLORS.get(MODE_ALIASES.get(mode_name, mode_name))
    if by_name is None:
        return DEFAULT_COLOR

    color = by_name.get(line_name)
    if color is None:
        logger.warning("Missing %s colour for line %r", mode_name, line_name)
        return DEFAULT_COLOR
    return color
