"""
View state and option flags.
"""

from .palette import Attr, Color

# ─────────────────────────────────────────────────────────────────────────────
# State Flags
# ─────────────────────────────────────────────────────────────────────────────

SF_VISIBLE = 0x0001
SF_CURSOR_VIS = 0x0002
SF_CURSOR_INS = 0x0004
SF_SHADOW = 0x0008
SF_ACTIVE = 0x0010
SF_SELECTED = 0x0020
SF_FOCUSED = 0x0040
SF_DRAGGING = 0x0080
SF_DISABLED = 0x0100
SF_MODAL = 0x0200
SF_DEFAULT = 0x0400
SF_EXPOSED = 0x0800
SF_CLOSED = 0x1000

# ─────────────────────────────────────────────────────────────────────────────
# Option Flags
# ─────────────────────────────────────────────────────────────────────────────

OF_SELECTABLE = 0x0001
OF_TOP_SELECT = 0x0002
OF_FIRST_CLICK = 0x0004
OF_FRAMED = 0x0008
OF_PRE_PROCESS = 0x0010
OF_POST_PROCESS = 0x0020
OF_CENTER_X = 0x0100
OF_CENTER_Y = 0x0200
OF_TILEABLE = 0x0800
OF_CENTERED = OF_CENTER_X | OF_CENTER_Y

# Window flags
WF_MOVE = 0x01
WF_GROW = 0x02
WF_CLOSE = 0x04
WF_ZOOM = 0x08

# Drop shadow: two columns to the right, one row below
SHADOW_SIZE = (2, 1)
SHADOW_ATTR = Attr(Color.DARK_GRAY, Color.BLACK)
