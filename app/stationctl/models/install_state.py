"""Install state model for the idempotency ledger.

The ledger records which packages a previous install run already
installed successfully, so an interrupted run can resume where it stopped.
Sets are persisted as JSON objects keyed by package name.
"""

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InstallState(BaseModel):
    """Packages confirmed installed by earlier install runs.

    Attributes:
        last_updated: When the ledger was last written.
        installed_formulae: Formula name -> installed flag.
        installed_casks: Cask name -> installed flag.
        installed_npm: npm package name -> installed flag.
    """

    model_config = ConfigDict(extra="ignore")

    last_updated: Annotated[datetime, Field(default_factory=lambda: datetime.now(UTC))]
    installed_formulae: Annotated[dict[str, bool], Field(default_factory=dict)]
    installed_casks: Annotated[dict[str, bool], Field(default_factory=dict)]
    installed_npm: Annotated[dict[str, bool], Field(default_factory=dict)]

    @field_validator("installed_formulae", "installed_casks", "installed_npm", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat a JSON null map as empty."""
        return {} if v is None else v
