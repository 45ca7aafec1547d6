from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CatalogExtra(BaseModel):
    """Extra property a catalog accepts"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    is_required: bool = Field(False, alias="isRequired")
    description: str | None = None


class CatalogDescriptor(BaseModel):
    """Catalog advertised in the manifest"""
    type: str
    id: str
    name: str
    extra: list[CatalogExtra] = Field(default_factory=list)


class Manifest(BaseModel):
    """Addon manifest served at /manifest.json"""
    id: str
    version: str
    name: str
    description: str
    resources: list[str]
    types: list[str]
    catalogs: list[CatalogDescriptor]


class MetaPreview(BaseModel):
    """Single catalog entry"""
    id: str = Field(..., description="Normalized channel identifier")
    name: str = Field(..., description="Display name of the channel")
    type: Literal["channel"] = "channel"
    poster: str = Field("", description="Logo URL, empty when the playlist has none")


class CatalogResponse(BaseModel):
    """Catalog listing response"""
    metas: list[MetaPreview]


class StreamItem(BaseModel):
    """Single playable stream"""
    title: str
    url: str = Field(..., description="Stream URL the player should open")
    type: Literal["live"] = "live"
    poster: str = ""


class StreamResponse(BaseModel):
    """Stream lookup response"""
    streams: list[StreamItem]
