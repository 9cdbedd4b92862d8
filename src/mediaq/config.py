from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mediaq.model.environment import Environment
from mediaq.model.query import MediaType


@dataclass(frozen=True)
class MediaqConfig:
    media_type: str = "screen"
    font_size: float = 16.0  # px per em/rem
    log_level: str = "WARNING"

    def environment(self, **overrides: Any) -> Environment:
        """Build an Environment from these defaults, with per-field *overrides*."""
        fields: dict[str, Any] = {
            "media_type": MediaType(self.media_type),
            "font_size": self.font_size,
        }
        fields.update({k: v for k, v in overrides.items() if v is not None})
        return Environment(**fields)
