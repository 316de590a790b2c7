"""Constants for the ring buffer package."""

# Growth factor applied to the backing region size when capacity runs out.
# Below 2 so freed blocks can be reused by later growth steps.
DEFAULT_GROWTH_FACTOR = 1.5

# One slot of every backing region is never occupied so that an empty
# range and a full range have different begin/end offsets.
SENTINEL_SLOTS = 1

ENV_GROWTH_FACTOR = "RADIXRING_GROWTH_FACTOR"
