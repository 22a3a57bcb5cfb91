"""
Game Deals Engine

Surfaces video-game discount deals from a third-party catalog, classifies
each deal by quality and urgency tier, converts prices to the viewer's
local currency, merges duplicate listings across storefronts, and ranks
the resulting list for browsing.
"""

__version__ = "0.1.0"
__author__ = "Game Deals Team"
