"""
Port: Presenter
Responsibility: turn abstract render lines into a concrete visual form.
"""
from typing import Protocol, runtime_checkable

from contracts import RenderedLine


@runtime_checkable
class Presenter(Protocol):
    def present(self, line: RenderedLine) -> str:
        """Returns the concrete representation of one rendered line."""
        ...
