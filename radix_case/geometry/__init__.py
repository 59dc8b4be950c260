from .footprints import (
    rect,
    circle,
    rotated_rect,
    rounded_rect,
    contains,
    overlaps,
    polygon_problems,
    inradius,
)
from .profiles import degenerate_profiles
