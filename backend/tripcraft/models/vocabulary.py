"""Canonical catalog vocabularies, as stored on the catalog documents."""

from typing import List

BUDGETS: List[str] = ["Low", "Medium", "Luxury"]

TRAVELER_TYPES: List[str] = ["Solo", "Couple", "Family", "Group"]

# Destination.type
INTEREST_TYPES: List[str] = [
    "Historical",
    "Adventure",
    "Cultural",
    "Experiences",
    "Theater and arts",
    "Concerts",
    "Sports",
    "Food",
    "Music",
]

# Destination.categories
DESTINATION_CATEGORIES: List[str] = [
    "Family-friendly",
    "Outdoor",
    "Luxury",
    "Budget",
    "Solo-traveler",
    "Group-traveler",
    "Indoor",
]

# Restaurant.cuisine
CUISINES: List[str] = [
    "Italian",
    "Japanese",
    "Greek",
    "Chinese",
    "Indonesian",
    "Mexican",
    "Turkish",
    "Spanish",
    "French",
    "Indian",
    "American",
    "Algerian",
    "Korean",
    "Lebanese",
    "Filipino",
    "Moroccan",
    "Egyptian",
    "Iranian",
    "Syrian",
    "khaleeji",
]

# Restaurant.categories
DINING_CATEGORIES: List[str] = [
    "Fine Dining",
    "Casual Dining",
    "Fast Food",
    "Cafe",
    "Buffet",
    "Food Truck",
    "Family Style",
    "Steakhouse",
    "Seafood",
    "Vegetarian",
    "Dessert",
    "Bakery",
    "Barbecue",
]
