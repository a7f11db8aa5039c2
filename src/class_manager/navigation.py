"""
Active view selection.

The front-end shows one of four views at a time. Any view can be
selected from any other; there are no transition rules.
"""

from enum import Enum
from typing import Union


class View(Enum):
    """Views the front-end can display."""
    DASHBOARD = "dashboard"
    STUDENTS = "students"
    COURSES = "courses"
    FEES = "fees"


class ViewSelector:
    """
    Holds the currently active view.

    Examples:
        >>> selector = ViewSelector()
        >>> selector.current
        <View.DASHBOARD: 'dashboard'>
        >>> selector.select("fees")
        <View.FEES: 'fees'>
    """

    def __init__(self, initial: View = View.DASHBOARD):
        self._current = initial

    @property
    def current(self) -> View:
        return self._current

    def select(self, view: Union[View, str]) -> View:
        """
        Make ``view`` the active view.

        Raises:
            ValueError: If ``view`` is not a known view name
        """
        if not isinstance(view, View):
            try:
                view = View(str(view).strip().lower())
            except ValueError:
                allowed = ", ".join(v.value for v in View)
                raise ValueError(f"Unknown view: {view} (expected one of: {allowed})")

        self._current = view
        return view
