"""Decision constants shared by seeding and the decision engine."""
from __future__ import annotations

# Draws are uniform integers in [0, PERCENT_SCALE)
PERCENT_SCALE = 100

# Odd constant mixed into the context seed to decorrelate its low bits from the identity hash
SEED_MIX_MULTIPLIER = 397

# Seeds are kept in the unsigned 32-bit domain
SEED_MASK = 0xFFFFFFFF
