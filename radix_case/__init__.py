"""radix-case — parametric enclosure for the Delta Radix programmer's calculator.

Builds the printable parts as immutable CSG trees from one parameter
table and hands them to OpenSCAD.
"""

__version__ = "0.1.0"
