"""Application constants.

Centralized location for all empirical tuning values, threshold tables
and fixed advisory strings used by the calculators.
"""

from decimal import Decimal

# ============================================================================
# Baker's Percentage / Formula Defaults
# ============================================================================

# Flour is the fixed 100% reference of every formula
FLOUR_PERCENT = Decimal("100")

# Defaults used when building a formula from named gram amounts
DEFAULT_WATER_PERCENT = Decimal("70")
DEFAULT_SALT_PERCENT = Decimal("2")
DEFAULT_STARTER_PERCENT = Decimal("20")

FLOUR_NAME_KEYWORDS = ("flour",)
WATER_NAMES = ("water",)
SALT_NAMES = ("salt",)
STARTER_NAME_KEYWORDS = ("starter", "levain")

# Recipe presets: name -> (water %, salt %, starter %, extras)
RECIPE_PRESETS = {
    "Country Loaf": (Decimal("70"), Decimal("2"), Decimal("20"), ()),
    "Baguette": (Decimal("75"), Decimal("2"), Decimal("15"), ()),
    "Ciabatta": (Decimal("80"), Decimal("2"), Decimal("20"), (("Olive Oil", Decimal("3")),)),
    "Pizza Dough": (Decimal("65"), Decimal("2"), Decimal("20"), (("Olive Oil", Decimal("2")),)),
    "Bagels": (Decimal("55"), Decimal("2"), Decimal("15"), (("Malt Syrup", Decimal("2")),)),
}

# ============================================================================
# Hydration
# ============================================================================

# Upper bounds (exclusive) for each hydration label
HYDRATION_LOW_BELOW = Decimal("60")
HYDRATION_MEDIUM_BELOW = Decimal("70")
HYDRATION_HIGH_BELOW = Decimal("80")

# ============================================================================
# Starter Percentage Classification
# ============================================================================

# (lower bound inclusive, speed key) in ascending order
STARTER_SPEED_BOUNDS = (
    (Decimal("0"), "very_slow"),
    (Decimal("5"), "slow"),
    (Decimal("10"), "moderate"),
    (Decimal("15"), "fast"),
    (Decimal("25"), "very_fast"),
)

STARTER_SPEED_ADVICE = {
    "very_slow": "Long bulk fermentation (12-24 hours). Great for developing complex flavors.",
    "slow": "Extended bulk fermentation (8-12 hours). Good flavor development.",
    "moderate": "Standard bulk fermentation (6-8 hours). Balanced flavor and timing.",
    "fast": "Shorter bulk fermentation (4-6 hours). Less sour, convenient timing.",
    "very_fast": "Quick bulk fermentation (3-5 hours). Mild flavor, risk of over-fermentation.",
}

# ============================================================================
# Preferments
# ============================================================================

# kind -> (hydration %, yeast %, salt %), all relative to preferment flour
PREFERMENT_PROFILES = {
    "poolish": (Decimal("100"), Decimal("0.1"), Decimal("0")),
    "biga": (Decimal("55"), Decimal("0.1"), Decimal("0")),
    "pate_fermentee": (Decimal("65"), Decimal("2"), Decimal("2")),
}

# ============================================================================
# Flour Blends
# ============================================================================

# Allowed deviation of a blend's percentage sum from 100%
BLEND_TOLERANCE_PERCENT = Decimal("0.1")

FLOUR_PRESETS = (
    ("Cake Flour", Decimal("7.5")),
    ("Pastry Flour", Decimal("9.0")),
    ("All-Purpose Flour", Decimal("10.5")),
    ("Bread Flour", Decimal("12.5")),
    ("High-Gluten Flour", Decimal("14.0")),
    ("Whole Wheat Flour", Decimal("14.0")),
    ("White Whole Wheat", Decimal("13.0")),
    ("Rye Flour (Medium)", Decimal("9.0")),
    ("Spelt Flour", Decimal("12.0")),
    ("Einkorn Flour", Decimal("13.5")),
)

# (label, range text, target protein %)
TARGET_PROTEIN_PRESETS = (
    ("Tender Cakes & Pastries", "9-10%", Decimal("9.5")),
    ("Pie Crusts & Crackers", "10-11%", Decimal("10.5")),
    ("Sandwich Bread & Soft Rolls", "11-12%", Decimal("11.5")),
    ("Artisan Sourdough & Country Loaves", "12-13%", Decimal("12.5")),
    ("Bagels, Pizza & Chewy Breads", "13-14%", Decimal("13.5")),
    ("High-Gluten Specialty Breads", "14%+", Decimal("14.5")),
)

# ============================================================================
# Bulk Fermentation Model
# ============================================================================

# Hours at 24°C with 20% strong starter at 75% hydration
FERMENTATION_BASE_HOURS = Decimal("4")
FERMENTATION_BASE_TEMP_C = Decimal("24")
# Rate doubles every this many degrees
FERMENTATION_DOUBLING_DEGREES_C = Decimal("10")
FERMENTATION_REFERENCE_STARTER_PERCENT = Decimal("20")
FERMENTATION_REFERENCE_HYDRATION = Decimal("75")
FERMENTATION_HYDRATION_EXPONENT = Decimal("0.2")
FERMENTATION_WHOLE_GRAIN_BASE = Decimal("0.95")
FERMENTATION_WHOLE_GRAIN_STEP = Decimal("10")
FERMENTATION_MIN_HOURS = Decimal("1")
FERMENTATION_MAX_HOURS = Decimal("24")
FERMENTATION_RANGE_LOW_FACTOR = Decimal("0.75")
FERMENTATION_RANGE_HIGH_FACTOR = Decimal("1.25")

STRENGTH_FACTORS = {
    "weak": Decimal("1.5"),
    "moderate": Decimal("1.2"),
    "strong": Decimal("1.0"),
    "very_strong": Decimal("0.85"),
}

STRENGTH_DESCRIPTIONS = {
    "weak": "Slow to peak, takes 12+ hours",
    "moderate": "Peaks in 8-12 hours",
    "strong": "Peaks in 4-8 hours",
    "very_strong": "Peaks in 3-4 hours",
}

# Temperature notes, first match wins: (operator, threshold °C, note)
FERMENTATION_TEMPERATURE_NOTES = (
    ("<", Decimal("18"), "Cold fermentation: expect longer rise with more flavor development"),
    ("<", Decimal("22"), "Cool environment: slower, controlled fermentation"),
    (">", Decimal("28"), "Warm environment: watch closely, can over-ferment quickly"),
)

# Starter percentage notes, first match wins
FERMENTATION_STARTER_NOTES = (
    ("<", Decimal("10"), "Low starter %: long fermentation, complex flavor"),
    (">", Decimal("30"), "High starter %: faster rise, milder flavor"),
)

WEAK_STARTER_NOTE = "Weak starter: consider feeding 8-12 hours before use"
WHOLE_GRAIN_NOTE_ABOVE = Decimal("30")
WHOLE_GRAIN_NOTE = "High whole grain: dough will ferment faster and may not rise as tall"

# Rise target: warm or starter-heavy doughs stop earlier
RISE_TARGET_FAST = "50-70%"
RISE_TARGET_SLOW = "75-100%"
RISE_TARGET_DEFAULT = "50-75%"
RISE_FAST_TEMP_ABOVE = Decimal("26")
RISE_FAST_STARTER_ABOVE = Decimal("25")
RISE_SLOW_TEMP_BELOW = Decimal("20")
RISE_SLOW_STARTER_BELOW = Decimal("15")

# ============================================================================
# Desired Dough Temperature
# ============================================================================

DDT_FACTOR_COUNT = Decimal("4")
WATER_TEMP_ICE_BELOW_F = Decimal("32")
WATER_TEMP_TOO_HOT_ABOVE_F = Decimal("100")
WATER_TEMP_WARM_ABOVE_F = Decimal("85")

# ============================================================================
# Starter Health
# ============================================================================

DEFAULT_FEEDING_FREQUENCY_HOURS = 12
# Overdue by more than this many hours is classified as poor
OVERDUE_POOR_AFTER_HOURS = 24

# Feeding logs averaged when refreshing starter health (newest first)
RECENT_FEEDING_LOG_COUNT = 7

# (minimum average activity, status key), checked in order
ACTIVITY_STATUS_THRESHOLDS = (
    (Decimal("4.5"), "excellent"),
    (Decimal("3.5"), "good"),
    (Decimal("2.5"), "fair"),
)

ACTIVITY_LEVEL_MIN = Decimal("1")
ACTIVITY_LEVEL_MAX = Decimal("5")

HEALTH_STATUS_DESCRIPTIONS = {
    "excellent": "Very active and healthy",
    "good": "Healthy and active",
    "fair": "Needs attention",
    "poor": "Requires immediate feeding",
    "inactive": "Not currently maintained",
}

STARTER_TYPE_NAMES = {
    "levain": "Levain",
    "liquid-levain": "Liquid Levain",
    "stiff-levain": "Stiff Levain",
    "poolish": "Poolish",
    "biga": "Biga",
    "pate-fermentee": "Pâte Fermentée",
    "sourdough": "Sourdough",
}

# ============================================================================
# Bake Timeline
# ============================================================================

DEFAULT_TIMELINE_STEPS = (
    ("Mix dough", Decimal("0.5")),
    ("Bulk fermentation", Decimal("4")),
    ("Shape", Decimal("0.25")),
    ("Final proof", Decimal("3")),
    ("Bake", Decimal("0.75")),
    ("Cool down", Decimal("1")),
)

# ============================================================================
# File Paths
# ============================================================================

DATA_DIRECTORY = "saves"
DATA_DIRECTORY_ENV = "SOURDOUGH_DATA_DIR"
LOG_LEVEL_ENV = "SOURDOUGH_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(threadName)s] %(levelname)s %(message)s"
