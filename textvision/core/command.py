"""
Standard command ids.

Commands are 16-bit ids carried by Command and Broadcast events. Ids below
100 are reserved for the framework; applications number their own from
100 upwards.
"""

# Dialog results
CM_VALID = 0
CM_OK = 10
CM_CANCEL = 11
CM_YES = 12
CM_NO = 13
CM_DEFAULT = 14

# Application and window management
CM_QUIT = 24
CM_CLOSE = 25
CM_ZOOM = 26
CM_NEXT = 27
CM_PREV = 28
CM_TILE = 29
CM_CASCADE = 30

# Broadcasts
CM_RECEIVED_FOCUS = 50
CM_RELEASED_FOCUS = 51
CM_COMMAND_SET_CHANGED = 52
CM_GRAB_DEFAULT = 62
CM_RELEASE_DEFAULT = 63

# First id free for applications
CM_USER = 100

# Commands a window enables while it is focused
WINDOW_COMMANDS = (CM_CLOSE, CM_ZOOM, CM_NEXT, CM_PREV)

# Commands that end a modal group
END_COMMANDS = frozenset({CM_OK, CM_CANCEL, CM_YES, CM_NO, CM_CLOSE})
