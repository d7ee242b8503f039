"""
Default settings for histogram runs.
"""

DEFAULT_COLUMN = 1
DEFAULT_DELIM = ","
DEFAULT_NUM_BINS = 10
DEFAULT_SKIP_HEADER = False

DEFAULT_OUTPUT_FORMAT = "edges"
DEFAULT_PRECISION = 2

DEFAULT_LOG_LEVEL = "warning"
