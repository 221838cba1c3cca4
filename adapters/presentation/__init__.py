from adapters.presentation.mathml import MathMLPresenter
from adapters.presentation.plain_text import PlainTextPresenter

__all__ = ["MathMLPresenter", "PlainTextPresenter"]
