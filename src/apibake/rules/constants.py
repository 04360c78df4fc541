"""Layout constants for the API reference document.

Gaps are expressed in lines of the style active when they are applied.
Sizes that do not follow the configurable base font size are absolute
points.
"""

# Vertical gaps (in lines)
HEADER_GAP = 0.7
PARA_GAP = 0.5
DESCRIPTION_GAP = 0.5

# Line height relative to the font size
LINE_HEIGHT_FACTOR = 1.15

# Title page (independent from the base font size)
TITLE_FONT_SIZE = 20
SUBTITLE_FONT_SIZE = 14
DATE_FONT_SIZE = 12
TITLE_PAGE_TOP_RATIO = 0.3

# Running header / footer stamps
STAMP_FONT_SIZE = 9

# Header sizes: base + HEADER_SIZE_BONUS - level * HEADER_SIZE_STEP
HEADER_SIZE_BONUS = 4
HEADER_SIZE_STEP = 2

# HTTP method banner
API_HEADER_SIZE_BONUS = 2
BANNER_LINE_WIDTH = 4.0
BANNER_TEXT_COLOR = "#FFFFFF"

# Example bodies are printed smaller than the base size
EXAMPLE_SIZE_DELTA = 2

ENUM_LABEL = "Values: "
