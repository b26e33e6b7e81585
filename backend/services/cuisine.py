"""
Restaurant presentation helpers derived from the provider's cuisine tag.

The cuisine tag is a semicolon separated string such as
"pizza;italian_bistro;burger". It feeds two things on a restaurant card:
a short list of popular items and a single pictogram.
"""
from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

DEFAULT_FOOD_EMOJI = "\U0001F37D\uFE0F"  # fork and knife with plate
MAX_FOOD_ITEMS = 3

# Checked top to bottom, first match wins: "pizza;italian" resolves to pizza.
FOOD_EMOJI_RULES: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("pizza", "italian"), "\U0001F355"),
    (("burger", "american"), "\U0001F354"),
    (("sushi", "japanese"), "\U0001F371"),
    (("chinese", "noodle", "ramen"), "\U0001F35C"),
    (("thai",), "\U0001F35B"),
    (("korean",), "\U0001F372"),
    (("indian",), "\U0001F35B"),
    (("taco", "mexican", "burrito"), "\U0001F32E"),
    (("chicken", "wings"), "\U0001F357"),
    (("steak", "bbq", "grill"), "\U0001F969"),
    (("sandwich", "deli"), "\U0001F96A"),
    (("hot_dog", "hotdog"), "\U0001F32D"),
    (("fish", "seafood"), "\U0001F41F"),
    (("coffee", "cafe"), "\u2615"),
    (("dessert", "cake", "ice_cream", "bakery"), "\U0001F370"),
    (("donut", "doughnut"), "\U0001F369"),
    (("breakfast", "pancake"), "\U0001F95E"),
    (("kebab",), "\U0001F959"),
    (("salad", "healthy"), "\U0001F957"),
    (("juice", "smoothie"), "\U0001F9C3"),
    (("french",), "\U0001F950"),
    (("mediterranean", "falafel"), "\U0001F9C6"),
)

_WORD_START = re.compile(r"\b\w")


def food_emoji_for(cuisine: Optional[str]) -> str:
    """Pick the pictogram for a cuisine tag; substring match, case-insensitive."""
    if not cuisine:
        return DEFAULT_FOOD_EMOJI
    lowered = cuisine.lower()
    for keywords, emoji in FOOD_EMOJI_RULES:
        if any(keyword in lowered for keyword in keywords):
            return emoji
    return DEFAULT_FOOD_EMOJI


def _title_words(text: str) -> str:
    # Only the first letter of each word is raised; "BBQ" stays "BBQ".
    return _WORD_START.sub(lambda m: m.group(0).upper(), text)


def parse_food_items(cuisine: Optional[str]) -> List[str]:
    """
    First three cuisine segments as display labels.

    "pizza;italian_bistro;unused;extra" -> ["Pizza", "Italian Bistro", "Unused"]
    """
    if not cuisine:
        return []
    items = []
    for segment in cuisine.split(";")[:MAX_FOOD_ITEMS]:
        label = segment.replace("_", " ").strip()
        if label:
            items.append(_title_words(label))
    return items
