from .emit import ScadSource, render_scad, to_scad
from .compiler import (
    GeometryError,
    OpenScadNotFound,
    check_scad,
    compile_scad,
    export_part,
    failing_operation,
)
