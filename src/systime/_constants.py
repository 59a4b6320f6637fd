"""Constants shared across systime."""

COMPACT_YEAR_PIVOT = 70
"""Two-digit years below this are 20xx, the rest are 19xx."""

MAX_FRACTION_DIGITS = 6
"""datetime keeps microseconds; extra fractional digits are truncated."""

DEFAULT_TABLE = "foo"

DEFAULT_CONFIG_FILENAME = "config.toml"

CONFIG_ENV_VAR = "SYSTIME_CONFIG"

DEMO_MEMO = "Theo is cute"
DEMO_IMPORT_TS = "210723120000+0000"
DEMO_IMPORT_TZ = "961219163957+0000"
