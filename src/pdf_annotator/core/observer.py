# SPDX-License-Identifier: Apache-2.0
"""Observer protocol for annotation processing."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

EVENT_START = "start"
EVENT_MAPPED = "mapped"
EVENT_COMPLETE = "complete"


@runtime_checkable
class AnnotationObserver(Protocol):
    """Called at the start of each annotation, after its rectangle is
    mapped, and once it has been fully applied."""

    def __call__(
        self,
        event: str,
        index: int,
        total: int,
        detail: dict[str, Any],
    ) -> None: ...
