# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
# DialFace - digital glyphs on a circular clock dial
"""
DialFace renders the current time as hour, minute and second glyphs placed
around a circular dial, switching between a low-power ambient appearance and
a full-detail interactive one.
"""

__version__ = "1.0.0"
__author__ = "DialFace"
