"""Application constants."""

# Perceived exertion scale
RPE_MIN = 1
RPE_MAX = 10

# Epley: e1RM = weight * (1 + reps / EPLEY_REPS_DIVISOR)
EPLEY_REPS_DIVISOR = 30

# Training summary windows (days)
SUMMARY_WEEK_DAYS = 7
SUMMARY_MONTH_DAYS = 30

# Exercise history page size
DEFAULT_HISTORY_LIMIT = 200
