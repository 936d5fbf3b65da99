from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class IndexRules(BaseModel):
    key_prefix: str = "INDEX"
    # Fixed for the life of a collection; the stored value wins afterwards
    default_page_size: int = Field(default=200, gt=0)
    logical_page_size: int = Field(default=20, gt=0)


class ItemsRules(BaseModel):
    key_prefix: str = "img"


class StorageRules(BaseModel):
    backend: Literal["sqlite", "memory"] = "sqlite"
    sqlite_path: str | None = None
    data_dir_env: str = "GALLERY_DATA_DIR"


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)


class Rules(BaseModel):
    index: IndexRules = Field(default_factory=IndexRules)
    items: ItemsRules = Field(default_factory=ItemsRules)
    storage: StorageRules = Field(default_factory=StorageRules)
    ops: OpsRules = Field(default_factory=OpsRules)

    model_config = ConfigDict(extra="forbid")
