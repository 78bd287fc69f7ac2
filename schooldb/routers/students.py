"""Student endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, status

from ..dependencies import get_records
from ..schemas import AverageResponse, StudentCreate, StudentRead, StudentUpdate
from ..services import SchoolRecords

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=list[StudentRead])
def list_students(records: SchoolRecords = Depends(get_records)) -> list[dict]:
    return records.students.list_all()


@router.get("/{student_id}", response_model=StudentRead)
def get_student(student_id: str, records: SchoolRecords = Depends(get_records)) -> dict:
    return records.students.get_by_id(student_id)


@router.post("", response_model=StudentRead, status_code=status.HTTP_201_CREATED)
def create_student(
    payload: Optional[StudentCreate] = Body(default=None),
    records: SchoolRecords = Depends(get_records),
) -> dict:
    return records.students.create(payload or {})


@router.api_route("/{student_id}", methods=["PUT", "PATCH"], response_model=StudentRead)
def update_student(
    student_id: str,
    payload: Optional[StudentUpdate] = Body(default=None),
    records: SchoolRecords = Depends(get_records),
) -> dict:
    return records.students.update(student_id, payload or {})


@router.delete("/{student_id}", response_model=StudentRead)
def delete_student(student_id: str, records: SchoolRecords = Depends(get_records)) -> dict:
    return records.students.delete(student_id)


@router.get("/{student_id}/average", response_model=AverageResponse)
def student_average(
    student_id: str, records: SchoolRecords = Depends(get_records)
) -> AverageResponse:
    average = records.aggregation.average_for("students", student_id)
    return AverageResponse(**average.to_dict())


__all__ = ["router"]
