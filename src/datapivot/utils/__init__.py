"""Generic utilities and helpers.

This is a collection of generic utilities and helpers
that can be helpful in the other parts of the codebase
and are not specifically bound to any component:
interpreting cells as numbers, rendering tables and charts
as text, and inspecting Python objects.
"""

from . import charts, inspect, numbers, tabulate

__all__ = ("charts", "inspect", "numbers", "tabulate")
