from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class InsightReport:
    report: str
    provider: str  # name of the provider that produced the text

    def to_dict(self) -> dict[str, Any]:
        return {"report": self.report}
