"""
Write-result schemas.

Write endpoints answer with the result vocabulary the frontend already
consumes: ``insertedId``, ``matchedCount``/``modifiedCount`` and
``deletedCount``.
"""

from typing import Optional

from .base import StandardizedModel


class InsertResult(StandardizedModel):
    acknowledged: bool = True
    inserted_id: str


class UpdateResult(StandardizedModel):
    acknowledged: bool = True
    matched_count: int
    modified_count: int

    @classmethod
    def from_matched(cls, matched: int) -> "UpdateResult":
        return cls(matched_count=matched, modified_count=matched)


class UpsertResult(UpdateResult):
    upserted_id: Optional[str] = None
    upserted_count: int = 0


class DeleteResult(StandardizedModel):
    acknowledged: bool = True
    deleted_count: int
