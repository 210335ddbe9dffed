"""Base classes for wiki2latex options.

This module defines the foundation shared by the visitor and conversion
options used throughout the wiki2latex pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


def validate_direction(name: str, value: str) -> None:
    """Raise ValueError unless ``value`` is a text direction."""
    if value not in ("ltr", "rtl"):
        raise ValueError(f"{name} must be 'ltr' or 'rtl', got {value!r}")
