"""
Closed value sets accepted by the page-layout options.
"""

from enum import Enum


class Unit(str, Enum):
    """Length units understood by the renderer."""

    PIXEL = "px"
    INCH = "in"
    CENTIMETER = "cm"
    MILLIMETER = "mm"


class Format(str, Enum):
    """Paper formats understood by the renderer."""

    LETTER = "Letter"
    LEGAL = "Legal"
    TABLOID = "Tabloid"
    LEDGER = "Ledger"
    A0 = "A0"
    A1 = "A1"
    A2 = "A2"
    A3 = "A3"
    A4 = "A4"
    A5 = "A5"
    A6 = "A6"
