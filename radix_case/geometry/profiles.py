"""Degenerate-profile pre-check for Solid trees.

OpenSCAD silently drops zero-area polygons and reports self-intersecting
ones deep inside CGAL.  Walking the tree first lets the caller name the
boolean operation that owns the bad profile.
"""

from __future__ import annotations

from radix_case.csg import (
    BOOLEAN_TYPES, Box, Circle, Cylinder, Polygon, Rect, Solid, Sphere,
    children_of,
)

from .footprints import polygon_problems


def _node_problems(node: Solid) -> list[str]:
    if isinstance(node, Polygon):
        return polygon_problems(node.points, node.paths)
    if isinstance(node, Rect) and (node.width <= 0 or node.height <= 0):
        return [f"Rectangle {node.width:.3f}×{node.height:.3f}mm has zero area."]
    if isinstance(node, Box) and min(node.width, node.depth, node.height) <= 0:
        return [f"Box {node.width:.3f}×{node.depth:.3f}×{node.height:.3f}mm has zero volume."]
    if isinstance(node, (Circle, Sphere)) and node.radius <= 0:
        return [f"Radius {node.radius:.3f}mm is not positive."]
    if isinstance(node, Cylinder) and (node.radius <= 0 or node.height <= 0):
        return [f"Cylinder r={node.radius:.3f} h={node.height:.3f}mm has zero volume."]
    return []


def degenerate_profiles(solid: Solid, root_label: str = "") -> list[tuple[str, str]]:
    """Return ``(operation, problem)`` for every degenerate primitive.

    *operation* is the label of the nearest labelled boolean above the
    primitive, or *root_label* when none is labelled.
    """
    found: list[tuple[str, str]] = []

    def walk(node: Solid, owner: str) -> None:
        if isinstance(node, BOOLEAN_TYPES) and node.label:
            owner = node.label
        for problem in _node_problems(node):
            found.append((owner, problem))
        for child in children_of(node):
            walk(child, owner)

    walk(solid, root_label)
    return found
