from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class AssetRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    display_name: Optional[str] = Field(default=None, alias="name")
    origin_path: Optional[str] = Field(default=None, alias="originName")
    resource_url: Optional[str] = Field(default=None, alias="svgUrl")
    brand_id: Optional[str] = Field(default=None, alias="brandId")


class AssetGroup(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: Optional[str] = None
    brand_id: Optional[str] = Field(default=None, alias="brandId")
    asset_ids: List[str] = Field(default_factory=list, alias="assetIds")


class NormalizedIcon(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str
    resource_url: str
    codepoint: int

    @property
    def hex_codepoint(self) -> str:
        return f"0x{self.codepoint:X}"


class RecordFailure(BaseModel):
    index: int
    display_name: Optional[str] = None
    issue: str
    action: str = "skipped"


class AssignmentResult(BaseModel):
    icons: List[NormalizedIcon] = Field(default_factory=list)
    failures: List[RecordFailure] = Field(default_factory=list)
    qualifying: int = 0

    def identifiers(self) -> List[str]:
        return [icon.identifier for icon in self.icons]

    def codepoints(self) -> Dict[str, int]:
        return {icon.identifier: icon.codepoint for icon in self.icons}


class CopyRemoteFile(BaseModel):
    type: Literal["copy_remote"] = "copy_remote"
    relative_path: str
    file_name: str
    url: str


class TextFile(BaseModel):
    type: Literal["text"] = "text"
    relative_path: str
    file_name: str
    content: str
    sha256: str


OutputFile = Union[CopyRemoteFile, TextFile]


class ReportSummary(BaseModel):
    assets: int = 0
    groups: int = 0
    qualifying: int = 0
    icons: int = 0
    skipped: int = 0
    deterministic: bool = True


class ExportReport(BaseModel):
    summary: ReportSummary
    failures: List[RecordFailure] = Field(default_factory=list)


class ExportResponse(BaseModel):
    files: List[OutputFile] = Field(default_factory=list)
    icons: List[NormalizedIcon] = Field(default_factory=list)
    report: ExportReport


class RemoteExportRequest(BaseModel):
    design_system_id: str
    version_id: str
    brand_id: Optional[str] = None


class HealthResponse(BaseModel):
    ok: bool = True
