# whowon/utils/constants.py
# Version: 1.0.0
# Fixed literals shared by the parser, the formatter and the presets.
# Changing any value here changes engine output; treat edits as releases.
#
# Standard import pattern:
#   from whowon.utils.constants import (
#       NUMBER_PATTERN,
#       NO_NAME_PLACEHOLDER,
#       WINNER_MARKER,
#       DIFFERENCE_DECIMALS,
#   )

import re


# ---------------------------------------------------------------------------
# LINE PARSER
# ---------------------------------------------------------------------------

# Optional sign, optional integer digits, optional single '.' or ',' decimal
# separator, required trailing digits. Only the first match on a line counts.
NUMBER_PATTERN: "re.Pattern[str]" = re.compile(r"[-+]?[0-9]*[.,]?[0-9]+")

# Comma decimal separator is normalised to this before float() conversion.
DECIMAL_SEPARATOR: str = "."
ALT_DECIMAL_SEPARATOR: str = ","


# ---------------------------------------------------------------------------
# WHITELIST RESOLVER
# ---------------------------------------------------------------------------

WHITELIST_DELIMITER: str = ","
WHITELIST_LINE_DELIMITER: str = "\n"


# ---------------------------------------------------------------------------
# OUTPUT FORMATTER
# ---------------------------------------------------------------------------

NO_NAME_PLACEHOLDER: str = "No Name"
WINNER_MARKER:       str = ":W:"
DIFFERENCE_DECIMALS: int = 2

# Second-word filter keeps ASCII letters only.
NON_ALPHA_PATTERN: "re.Pattern[str]" = re.compile(r"[^a-zA-Z]")


# ---------------------------------------------------------------------------
# PRESETS
# ---------------------------------------------------------------------------
# name -> (winner_count, duplicate_mode, tie_mode). Both presets switch
# exact match off. Mode values are the TieMode / DuplicateMode wire strings.

PRESET_TABLE: dict = {
    "promo":   (2, "keepFirst", "firstOnly"),
    "classic": (1, "keepLast",  "includeAll"),
}
