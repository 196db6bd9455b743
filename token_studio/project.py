"""Project-sync snapshot sent by the host.

The host reports every variable collection and style in the document,
split into the ones the plugin manages and everything else. Payloads are
validated with pydantic before the store imports them.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import HostPayloadError


class _HostModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ProjectVariable(_HostModel):
    """A host variable with its default-mode value."""

    id: str
    name: str
    resolved_type: str = Field(alias="resolvedType")
    value: Any = None
    description: str | None = None


class ProjectMode(_HostModel):
    mode_id: str = Field(alias="modeId")
    name: str


class ProjectCollection(_HostModel):
    """A host variable collection."""

    id: str
    name: str
    modes: list[ProjectMode] = Field(default_factory=list)
    variable_count: int = Field(default=0, alias="variableCount")
    variables: list[ProjectVariable] = Field(default_factory=list)
    is_managed: bool = Field(default=False, alias="isManaged")


class ProjectStyle(_HostModel):
    """A paint or text style."""

    id: str
    name: str
    type: Literal["PAINT", "TEXT"]
    description: str | None = None
    color: dict[str, float] | None = None
    font_size: float | None = Field(default=None, alias="fontSize")
    font_family: str | None = Field(default=None, alias="fontFamily")
    is_managed: bool = Field(default=False, alias="isManaged")


class ManagedSplit(_HostModel):
    managed: list[ProjectCollection] = Field(default_factory=list)
    other: list[ProjectCollection] = Field(default_factory=list)


class StyleSplit(_HostModel):
    managed: list[ProjectStyle] = Field(default_factory=list)
    other: list[ProjectStyle] = Field(default_factory=list)


class ProjectStyles(_HostModel):
    paint: StyleSplit = Field(default_factory=StyleSplit)
    text: StyleSplit = Field(default_factory=StyleSplit)


class ProjectSyncData(_HostModel):
    """Full snapshot of the host document's variables and styles."""

    collections: ManagedSplit = Field(default_factory=ManagedSplit)
    styles: ProjectStyles = Field(default_factory=ProjectStyles)
    synced_at: int | None = Field(default=None, alias="syncedAt")

    @classmethod
    def parse(cls, data: dict[str, Any]) -> "ProjectSyncData":
        """Validate a raw host snapshot.

        Raises:
            HostPayloadError: If the snapshot does not match the contract.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise HostPayloadError("project-sync", str(e)) from e
