"""
Fixed layout constants.
"""

SLOTS_PER_WEEK = 7

# Sentinel slot index for an interval that does not touch a row
NO_SLOT = -1

# Fraction of a day cell where a bar starts on check-in day / ends on checkout day
CHECKIN_INSET = 0.52
CHECKOUT_INSET = 0.48

# Weeks start on Sunday (column 0)
WEEK_START_WEEKDAY = 6  # date.weekday() value for Sunday
