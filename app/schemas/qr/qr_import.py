from typing import List, Optional
from pydantic import Field

from app.models.shared.enums import ImportOutcome
from app.schemas.common.base import CamelModel


class ImportReport(CamelModel):
    successful: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)
    inserted_ids: List[str] = Field(default_factory=list)

    @property
    def outcome(self) -> ImportOutcome:
        if self.successful == 0:
            return ImportOutcome.FAILED
        if self.failed > 0:
            return ImportOutcome.PARTIAL
        return ImportOutcome.SUCCESS

    def merge(self, other: "ImportReport") -> "ImportReport":
        self.successful += other.successful
        self.failed += other.failed
        self.errors.extend(other.errors)
        self.inserted_ids.extend(other.inserted_ids)
        return self


class ImportResponse(CamelModel):
    success: bool
    message: str
    details: ImportReport


class ImportTemplateExample(CamelModel):
    qr_code_id: str
    url: str


class ImportTemplate(CamelModel):
    headers: List[str]
    example: ImportTemplateExample
