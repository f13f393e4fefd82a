"""FX conversion repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.fx_conversion import FxConversion


class FxConversionRepository(Protocol):
    """Repository for currency conversion records."""

    def get_by_id(self, conversion_id: int) -> Optional[FxConversion]:
        ...

    def list_all(self) -> list[FxConversion]:
        """List every conversion, most recent first."""
        ...

    def create(self, conversion: FxConversion) -> FxConversion:
        ...
