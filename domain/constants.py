"""
Centralized constants for the portfolio: eligible image types, reserved route
names, the built-in fallback category set and the fixed copy shown on the site.
"""

# Artwork eligibility is decided by extension only (compared lowercase, no dot)
IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp"})

HOME = "home"
ABOUT = "about"
# Reserved names never render as artwork grids but stay in the navigation
RESERVED_NAMES = frozenset({HOME, ABOUT})

# Used when discovery fails so the site always has something navigable
DEFAULT_CATEGORIES = ["fiber art", "garments", "graphics", "illustration"]

# Display label overrides; anything else is title-cased from the folder name
DISPLAY_NAME_MAP = {
    "about": "About",
    "fibers": "Fiber Art",
    "fiber art": "Fiber Art",
    "2d": "2D Works",
    "3d": "3D Sculptures",
}

# Directory-listing parent link variants
PARENT_LINKS = frozenset({"../", ".."})

# Session storage key written by the not-found page before redirecting home
REDIRECT_STASH_KEY = "redirect"

ARTIST_NAME = "Ferris Halemeh"

ABOUT_PARAGRAPHS = [
    "Welcome to my art portfolio. I am Ferris Halemeh, an artist working across "
    "multiple mediums including 2D works, 3D sculptures, fiber arts, and "
    "sketchbook explorations.",
    "My work explores themes of identity, memory, and the intersection of digital "
    "and physical spaces. Through various mediums, I seek to create connections "
    "between different forms of expression and experience.",
    "Please explore the different categories to view my work across these various "
    "disciplines.",
]

EMPTY_CATEGORY_MESSAGE = "No artwork available in this category."
IMAGE_UNAVAILABLE_MESSAGE = "Image not available"
