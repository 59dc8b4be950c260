"""CSG expression tree — immutable nodes, constructors, traversal, bounds."""

from .solid import (
    Solid, Rect, Circle, Polygon, Box, Cylinder, Sphere, Extrude, HalfSpace,
    Translate, Rotate, Union, Difference, Intersection, Minkowski,
    BOOLEAN_TYPES,
    translate, rotate, extrude, minkowski, union, difference, intersection,
    children_of, iter_nodes, iter_placed,
)
from .bounds import Bounds, bounds

__all__ = [
    # Nodes
    "Solid", "Rect", "Circle", "Polygon", "Box", "Cylinder", "Sphere",
    "Extrude", "HalfSpace", "Translate", "Rotate", "Union", "Difference",
    "Intersection", "Minkowski", "BOOLEAN_TYPES",
    # Constructors
    "translate", "rotate", "extrude", "minkowski", "union", "difference",
    "intersection",
    # Traversal
    "children_of", "iter_nodes", "iter_placed",
    # Bounds
    "Bounds", "bounds",
]
