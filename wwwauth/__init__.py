"""
wwwauth parses, checks and serialises HTTP authentication challenges.
"""

__version__ = "1.0.0"
