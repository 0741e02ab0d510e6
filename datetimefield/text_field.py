"""Plain text field the date-time field wraps for storage and validation."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

# Regexp modifiers from field semantics -> re flags
_MODIFIER_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}


class TextField:
    """Holds the raw string value and tells subscribers when it is committed."""

    def __init__(
        self,
        field: Dict[str, Any],
        params: Optional[str] = None,
        set_value: Optional[Callable[[Dict[str, Any], Any], None]] = None,
    ):
        self.field = field
        self.params = params
        self.set_value = set_value
        self.value = params if isinstance(params, str) else ""
        self.changes: List[Callable[[Any], None]] = []
        self.errors: List[str] = []

    def commit(self) -> None:
        """Store the current value and notify subscribers."""
        value = self.value.strip()
        self.params = value if value else None
        if self.set_value is not None:
            self.set_value(self.field, self.params)
        for change in list(self.changes):
            change(self.params)

    def validate(self) -> bool:
        self.errors = []
        value = self.value.strip()
        label = self.field.get("label", self.field.get("name", "Field"))

        if not value:
            if not self.field.get("optional", False):
                self.errors.append(f"{label} is required and must have a value.")
            return not self.errors

        max_length = self.field.get("maxLength")
        if max_length is not None and len(value) > int(max_length):
            self.errors.append(f"{label} exceeds the maximum of {max_length} characters.")

        regexp = self.field.get("regexp")
        if regexp:
            flags = 0
            for modifier in regexp.get("modifiers", ""):
                flags |= _MODIFIER_FLAGS.get(modifier, 0)
            if not re.search(regexp["pattern"], value, flags):
                self.errors.append(f"{label} does not match the required format.")

        if self.errors:
            logger.debug("Validation failed for %s: %s", label, self.errors)
        return not self.errors
