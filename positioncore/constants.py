"""positioncore.constants

Side tags and numeric constants shared by the formulas.

Only LONG and SHORT are accepted by side-dependent functions. NO_POS and CLOSE
are bookkeeping values used by the calling engine to mark position state; the
formulas in this package reject them.
"""

from enum import IntEnum


class Side(IntEnum):
    LONG = 0
    SHORT = 1
    NO_POS = 2
    CLOSE = 3


LONG = Side.LONG
SHORT = Side.SHORT
NO_POS = Side.NO_POS
CLOSE = Side.CLOSE

# decimals kept after step rounding to strip float noise
DECIMAL_PLACES = 12
