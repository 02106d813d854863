"""Constants for CAROL score combination."""

# Classification
CAROL_CUTOFF = 0.98
NEUTRAL = "Neutral"
DELETERIOUS = "Deleterious"

# Boundary clamps (literals match the reference R implementation)
UPPER_CLAMP = 0.999
LOWER_CLAMP = 0.0001
