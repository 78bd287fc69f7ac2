"""Course endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ..dependencies import get_records
from ..schemas import AverageResponse, CourseCreate, CourseRead, CourseUpdate
from ..services import SchoolRecords

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=list[CourseRead])
def list_courses(
    teacher_id: Optional[str] = Query(default=None, alias="teacherId"),
    records: SchoolRecords = Depends(get_records),
) -> list[dict]:
    if teacher_id is not None:
        return records.courses.list_for_teacher(teacher_id)
    return records.courses.list_all()


@router.get("/{course_id}", response_model=CourseRead)
def get_course(course_id: str, records: SchoolRecords = Depends(get_records)) -> dict:
    return records.courses.get_by_id(course_id)


@router.post("", response_model=CourseRead, status_code=status.HTTP_201_CREATED)
def create_course(
    payload: Optional[CourseCreate] = Body(default=None),
    records: SchoolRecords = Depends(get_records),
) -> dict:
    return records.courses.create(payload or {})


@router.api_route("/{course_id}", methods=["PUT", "PATCH"], response_model=CourseRead)
def update_course(
    course_id: str,
    payload: Optional[CourseUpdate] = Body(default=None),
    records: SchoolRecords = Depends(get_records),
) -> dict:
    return records.courses.update(course_id, payload or {})


@router.delete("/{course_id}", response_model=CourseRead)
def delete_course(course_id: str, records: SchoolRecords = Depends(get_records)) -> dict:
    return records.courses.delete(course_id)


@router.get("/{course_id}/average", response_model=AverageResponse)
def course_average(
    course_id: str, records: SchoolRecords = Depends(get_records)
) -> AverageResponse:
    average = records.aggregation.average_for("courses", course_id)
    return AverageResponse(**average.to_dict())


__all__ = ["router"]
