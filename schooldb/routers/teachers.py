"""Teacher endpoints, including the per-teacher course summary."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from ..dependencies import get_records
from ..schemas import TeacherCreate, TeacherRead, TeacherSummaryResponse, TeacherUpdate
from ..services import SchoolRecords

router = APIRouter(prefix="/teachers", tags=["teachers"])


@router.get("", response_model=list[TeacherRead])
def list_teachers(records: SchoolRecords = Depends(get_records)) -> list[dict]:
    return records.teachers.list_all()


@router.get("/{teacher_id}", response_model=TeacherRead)
def get_teacher(teacher_id: str, records: SchoolRecords = Depends(get_records)) -> dict:
    return records.teachers.get_by_id(teacher_id)


@router.post("", response_model=TeacherRead, status_code=status.HTTP_201_CREATED)
def create_teacher(
    payload: Optional[TeacherCreate] = Body(default=None),
    records: SchoolRecords = Depends(get_records),
) -> dict:
    return records.teachers.create(payload or {})


@router.api_route("/{teacher_id}", methods=["PUT", "PATCH"], response_model=TeacherRead)
def update_teacher(
    teacher_id: str,
    payload: Optional[TeacherUpdate] = Body(default=None),
    records: SchoolRecords = Depends(get_records),
) -> dict:
    return records.teachers.update(teacher_id, payload or {})


@router.delete("/{teacher_id}", response_model=TeacherRead)
def delete_teacher(teacher_id: str, records: SchoolRecords = Depends(get_records)) -> dict:
    return records.teachers.delete(teacher_id)


@router.get("/{teacher_id}/summary", response_model=TeacherSummaryResponse)
def teacher_summary(
    teacher_id: str, records: SchoolRecords = Depends(get_records)
) -> TeacherSummaryResponse:
    summary = records.aggregation.summary_for(teacher_id)
    return TeacherSummaryResponse(**summary.to_dict())


__all__ = ["router"]
