"""
Core constants and vocabulary for card search smart pills.

The keyword vocabulary, manufacturer set and lookup tables are hand-curated.
Keywords are matched as lowercase substrings of listing titles, so short
terms such as "auto" also match longer words like "autograph".
"""
from enum import Enum


class PillOperator(str, Enum):
    """How a pill's filter value is applied to a search."""
    EQUALS = "="
    CONTAINS = "contains"  # Folded into the query text, never a filter
    RANGE = "range"


class PillColor(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    PURPLE = "purple"
    AMBER = "amber"
    RED = "red"
    GRAY = "gray"


# Attributes in the hosted index
PRICE_ATTRIBUTE = "currentPrice"
GRADING_SERVICE_ATTRIBUTE = "gradingService"
GRADE_ATTRIBUTE = "grade"
YEAR_ATTRIBUTE = "year"
BRAND_ATTRIBUTE = "brand"
TITLE_ATTRIBUTE = "title"

# Keywords looked up in lowercased titles
CARD_KEYWORDS: tuple[str, ...] = (
    "rookie",
    "auto",
    "autograph",
    "chrome",
    "prizm",
    "refractor",
    "numbered",
    "jersey",
    "patch",
    "parallel",
    "insert",
    "rookie card",
    "rc",
    "base",
    "short print",
    "sp",
    "exclusive",
    "rpa",
    "serial",
    "optic",
    "select",
    "mosaic",
    "donruss",
    "topps",
    "panini",
    "fleer",
    "upper deck",
    "bowman",
    "certified",
    "limited",
    "silver",
    "gold",
    "holo",
    "shimmer",
    "wave",
    "cracked ice",
    "stained glass",
    "signed",
    "mem",
    "memorabilia",
    "/99",
    "/25",
    "/10",
    "/5",
    "/1",
    "1/1",
)

# Known card manufacturers. Brand values outside this set are usually
# player names and are not surfaced as brand pills.
CARD_MANUFACTURERS: frozenset[str] = frozenset({
    "Topps",
    "Panini",
    "Upper Deck",
    "Fleer",
    "Donruss",
    "Bowman",
    "Score",
    "Leaf",
    "Pacific",
    "Skybox",
    "Stadium Club",
    "Select",
})

# Grades worth suggesting; every other observed grade is ignored
POPULAR_GRADES: tuple[float, ...] = (10, 9.5, 9)

# Canonical price buckets: label -> (lower bound inclusive, upper bound exclusive)
PRICE_BUCKETS: dict[str, tuple[float | None, float | None]] = {
    "$0-100": (None, 100),
    "$100-500": (100, 500),
    "$500-1000": (500, 1000),
    "$1000+": (1000, None),
}

GRADING_SERVICE_ICONS: dict[str, str] = {
    "PSA": "🏆",
    "BGS": "💎",
    "SGC": "⭐",
    "CGC": "🎯",
}
DEFAULT_GRADING_SERVICE_ICON = "📋"

KEYWORD_ICONS: dict[str, str] = {
    "rookie": "⭐",
    "rookie card": "⭐",
    "rc": "⭐",
    "auto": "✍️",
    "autograph": "✍️",
    "signed": "✍️",
    "rpa": "✍️",
    "chrome": "✨",
    "prizm": "🌈",
    "optic": "🔮",
    "select": "🎯",
    "mosaic": "🎨",
    "refractor": "💫",
    "numbered": "🔢",
    "serial": "🔢",
    "jersey": "👕",
    "patch": "🧩",
    "mem": "🎁",
    "memorabilia": "🎁",
    "parallel": "📊",
    "insert": "🎴",
    "base": "📇",
    "short print": "💎",
    "sp": "💎",
    "exclusive": "👑",
    "limited": "⭐",
    "certified": "✅",
    "silver": "🥈",
    "gold": "🥇",
    "holo": "✨",
    "/99": "🔢",
    "/25": "💎",
    "/10": "👑",
    "/5": "💫",
    "/1": "🏆",
    "1/1": "🏆",
}
DEFAULT_KEYWORD_ICON = "🎯"

KEYWORD_LABELS: dict[str, str] = {
    "rookie": "Rookie Cards",
    "rookie card": "Rookie Cards",
    "rc": "Rookie Cards",
    "auto": "Autographs",
    "autograph": "Autographs",
    "signed": "Signed",
    "rpa": "Rookie Patch Auto",
    "chrome": "Chrome",
    "prizm": "Prizm",
    "optic": "Optic",
    "select": "Select",
    "mosaic": "Mosaic",
    "donruss": "Donruss",
    "topps": "Topps",
    "panini": "Panini",
    "fleer": "Fleer",
    "upper deck": "Upper Deck",
    "bowman": "Bowman",
    "refractor": "Refractors",
    "numbered": "Numbered",
    "serial": "Serial Numbered",
    "jersey": "Jersey Cards",
    "patch": "Patch Cards",
    "mem": "Memorabilia",
    "memorabilia": "Memorabilia",
    "parallel": "Parallels",
    "insert": "Inserts",
    "base": "Base Cards",
    "short print": "Short Prints",
    "sp": "Short Prints",
    "exclusive": "Exclusives",
    "limited": "Limited",
    "certified": "Certified",
    "silver": "Silver",
    "gold": "Gold",
    "holo": "Holo",
    "shimmer": "Shimmer",
    "wave": "Wave",
    "cracked ice": "Cracked Ice",
    "stained glass": "Stained Glass",
    "/99": "Numbered /99",
    "/25": "Numbered /25",
    "/10": "Numbered /10",
    "/5": "Numbered /5",
    "/1": "Numbered /1",
    "1/1": "One of One",
}

KEYWORD_COLORS: dict[str, PillColor] = {
    "rookie": PillColor.BLUE,
    "rookie card": PillColor.BLUE,
    "rc": PillColor.BLUE,
    "auto": PillColor.PURPLE,
    "autograph": PillColor.PURPLE,
    "rpa": PillColor.PURPLE,
    "chrome": PillColor.BLUE,
    "prizm": PillColor.BLUE,
    "refractor": PillColor.BLUE,
    "numbered": PillColor.AMBER,
    "serial": PillColor.AMBER,
    "jersey": PillColor.GREEN,
    "patch": PillColor.GREEN,
}

YEAR_ICON = "📅"
BRAND_ICON = "📇"
PRICE_ICON = "💰"

# Candidate pills evaluated for the empty query
DEFAULT_PILL_TEMPLATES: tuple[dict, ...] = (
    # Top grading services
    {"id": "service-psa", "label": "PSA", "icon": "🏆", "attribute": GRADING_SERVICE_ATTRIBUTE, "value": "PSA", "color": PillColor.GREEN},
    {"id": "service-bgs", "label": "BGS", "icon": "💎", "attribute": GRADING_SERVICE_ATTRIBUTE, "value": "BGS", "color": PillColor.GREEN},
    {"id": "service-cgc", "label": "CGC", "icon": "🎯", "attribute": GRADING_SERVICE_ATTRIBUTE, "value": "CGC", "color": PillColor.GREEN},
    {"id": "service-sgc", "label": "SGC", "icon": "⭐", "attribute": GRADING_SERVICE_ATTRIBUTE, "value": "SGC", "color": PillColor.GREEN},
    # Popular grades
    {"id": "grade-10", "label": "Grade 10", "icon": "🏆", "attribute": GRADE_ATTRIBUTE, "value": 10, "color": PillColor.GREEN},
    {"id": "grade-9.5", "label": "Grade 9.5", "icon": "⭐", "attribute": GRADE_ATTRIBUTE, "value": 9.5, "color": PillColor.GREEN},
    {"id": "grade-9", "label": "Grade 9", "icon": "⭐", "attribute": GRADE_ATTRIBUTE, "value": 9, "color": PillColor.GREEN},
    # Price ranges
    {"id": "price-0-100", "label": "$0-100", "icon": PRICE_ICON, "attribute": PRICE_ATTRIBUTE, "value": "$0-100", "operator": PillOperator.RANGE, "color": PillColor.AMBER},
    {"id": "price-100-500", "label": "$100-500", "icon": PRICE_ICON, "attribute": PRICE_ATTRIBUTE, "value": "$100-500", "operator": PillOperator.RANGE, "color": PillColor.AMBER},
    {"id": "price-1000plus", "label": "$1000+", "icon": PRICE_ICON, "attribute": PRICE_ATTRIBUTE, "value": "$1000+", "operator": PillOperator.RANGE, "color": PillColor.AMBER},
)

# Hardcoded popular searches
POPULAR_QUERIES: tuple[dict, ...] = (
    {"query": "pokemon", "nbHits": 378001},
    {"query": "ohtani", "nbHits": 6000},
    {"query": "michael jordan", "nbHits": 20479},
    {"query": "charizard", "nbHits": 15140},
    {"query": "lebron james", "nbHits": 18500},
    {"query": "tom brady", "nbHits": 12000},
    {"query": "kobe bryant", "nbHits": 5682},
    {"query": "messi", "nbHits": 5215},
)

# Enrichment limits
MIN_PILL_RESULTS = 5
MAX_KEYWORD_PILLS = 10
MAX_FILTER_PILLS = 5
MAX_SYNTHESIZED_PILLS = 20
MAX_YEAR_PILLS = 3
MAX_BRAND_PILLS = 3
MIN_FEATURE_FREQUENCY = 0.02  # Fraction of the sample

# Saved search watermark scan depth
NEW_ITEMS_SCAN_LIMIT = 100

BELOW_THRESHOLD_REASON = "below_threshold"
