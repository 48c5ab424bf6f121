"""Remote config payload model.

A remote config is the shareable desired-state document served by the
config service. Fetching it is out of scope here; this model validates a
payload once it is on hand (e.g., saved to disk) so the reconciler can use
its plain package lists.
"""

import re
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

PACKAGE_NAME_RE = re.compile(r"^[a-zA-Z0-9@_.][a-zA-Z0-9@/_.-]*$")
TAP_NAME_RE = re.compile(r"^[a-zA-Z0-9_][a-zA-Z0-9_-]*/[a-zA-Z0-9_-]+$")


class RemoteConfig(BaseModel):
    """Desired-state config as published by the config service.

    Attributes:
        username: Owner of the config.
        slug: Config identifier within the owner's namespace.
        name: Display name.
        preset: Base preset the config was built from.
        packages: Formulae to keep installed.
        casks: Casks to keep installed.
        taps: Taps to keep.
        npm: Global npm packages to keep installed.
        dotfiles_repo: Optional dotfiles repository URL.
        post_install: Shell commands run after installation.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    username: str = ""
    slug: str = ""
    name: str = ""
    preset: str = ""
    packages: Annotated[list[str], Field(default_factory=list)]
    casks: Annotated[list[str], Field(default_factory=list)]
    taps: Annotated[list[str], Field(default_factory=list)]
    npm: Annotated[list[str], Field(default_factory=list)]
    dotfiles_repo: str = ""
    post_install: Annotated[list[str], Field(default_factory=list)]

    @field_validator("packages", "casks", "taps", "npm", "post_install", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat a JSON null list as empty."""
        return [] if v is None else v

    @field_validator("packages", "casks", "npm")
    @classmethod
    def validate_package_names(cls, v: list[str], info: Any) -> list[str]:
        """Reject names that could be mistaken for command-line flags or paths."""
        for name in v:
            if not PACKAGE_NAME_RE.match(name):
                msg = f"invalid {info.field_name} name: {name!r}"
                raise ValueError(msg)
        return v

    @field_validator("taps")
    @classmethod
    def validate_tap_names(cls, v: list[str]) -> list[str]:
        """Require taps in owner/repo form."""
        for tap in v:
            if not TAP_NAME_RE.match(tap):
                msg = f"invalid tap name: {tap!r} (expected format: owner/repo)"
                raise ValueError(msg)
        return v

    @field_validator("dotfiles_repo")
    @classmethod
    def validate_dotfiles_repo(cls, v: str) -> str:
        """Only allow https:// or git@ repository URLs."""
        if v and not v.startswith(("https://", "git@")):
            msg = f"invalid dotfiles_repo: {v!r} (only https:// or git@ URLs allowed)"
            raise ValueError(msg)
        return v
