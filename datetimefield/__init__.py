"""Date-time field built on a plain text field and an external calendar picker."""

from .text_field import TextField
from .widget import DateTimeField

__all__ = ["DateTimeField", "TextField"]
