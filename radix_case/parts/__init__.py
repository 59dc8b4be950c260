"""Enclosure parts — one builder per printable part.

Each builder takes a validated ``ParameterTable`` and returns a fresh
``Solid`` rooted at the part's local origin:

  bottom-shell   tray holding the PCB on standoffs
  top-shell      rim, key-surround deck and tilted display mount
  display-frame  the display mount on its own, for test prints
  logo-indent    the Δ glyph as a positive solid
  button-cap     cap for the angled push button
"""

from __future__ import annotations

import logging
from typing import Callable

from radix_case.config import ParameterTable, require_valid, tessellation_warnings
from radix_case.csg import Solid

from .bottom_shell import build_bottom_shell
from .button_cap import build_button_cap
from .display_frame import build_display_frame
from .logo import build_logo_indent
from .top_shell import build_top_shell

log = logging.getLogger(__name__)

# Cuts a legend into a keycap.  Keycaps are produced outside this
# package; only the signature is fixed here.
LegendEngraver = Callable[[Solid, str], Solid]

PARTS: dict[str, Callable[[ParameterTable], Solid]] = {
    "bottom-shell": build_bottom_shell,
    "top-shell": build_top_shell,
    "display-frame": build_display_frame,
    "logo-indent": build_logo_indent,
    "button-cap": build_button_cap,
}


def build_part(name: str, table: ParameterTable) -> Solid:
    """Validate *table* and build the part registered as *name*.

    Raises ``KeyError`` for an unknown part and ``ConfigurationError``
    when the table is inconsistent; no tree is built in either case.
    """
    try:
        builder = PARTS[name]
    except KeyError:
        raise KeyError(f"Unknown part '{name}' (choose from {', '.join(PARTS)})") from None
    require_valid(table)
    for warning in tessellation_warnings(table):
        log.warning("%s", warning)
    log.info("Building %s", name)
    return builder(table)
