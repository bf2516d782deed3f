"""
Artist Selection for Onboarding.

Fixed catalog of artists shown on the last step. The user picks exactly
three; the picks seed personalization after sign-up.
"""


AVAILABLE_ARTISTS = [
    "Taylor Swift", "Drake", "The Weeknd", "Bad Bunny", "Ed Sheeran",
    "Ariana Grande", "Post Malone", "Billie Eilish", "Dua Lipa", "Justin Bieber",
    "Beyoncé", "Kendrick Lamar", "Lady Gaga", "Bruno Mars", "Rihanna",
    "Coldplay", "Imagine Dragons", "Maroon 5", "The Chainsmokers", "Calvin Harris",
]

MAX_SELECTED_ARTISTS = 3


def get_artist_options() -> list[str]:
    """Get all artist options for UI display."""
    return list(AVAILABLE_ARTISTS)
