"""Endpoints for recorded test results."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ..dependencies import get_records
from ..schemas import TestCreate, TestRead, TestUpdate
from ..services import SchoolRecords, parse_record_id

router = APIRouter(prefix="/tests", tags=["tests"])


@router.get("", response_model=list[TestRead])
def list_tests(
    student_id: Optional[str] = Query(default=None, alias="studentId"),
    course_id: Optional[str] = Query(default=None, alias="courseId"),
    records: SchoolRecords = Depends(get_records),
) -> list[dict]:
    if student_id is not None:
        results = records.tests.list_for_student(student_id)
        if course_id is not None:
            wanted = parse_record_id(course_id)
            results = [test for test in results if test["course_id"] == wanted]
        return results
    if course_id is not None:
        return records.tests.list_for_course(course_id)
    return records.tests.list_all()


@router.get("/{test_id}", response_model=TestRead)
def get_test(test_id: str, records: SchoolRecords = Depends(get_records)) -> dict:
    return records.tests.get_by_id(test_id)


@router.post("", response_model=TestRead, status_code=status.HTTP_201_CREATED)
def create_test(
    payload: Optional[TestCreate] = Body(default=None),
    records: SchoolRecords = Depends(get_records),
) -> dict:
    return records.tests.create(payload or {})


@router.api_route("/{test_id}", methods=["PUT", "PATCH"], response_model=TestRead)
def update_test(
    test_id: str,
    payload: Optional[TestUpdate] = Body(default=None),
    records: SchoolRecords = Depends(get_records),
) -> dict:
    return records.tests.update(test_id, payload or {})


@router.delete("/{test_id}", response_model=TestRead)
def delete_test(test_id: str, records: SchoolRecords = Depends(get_records)) -> dict:
    return records.tests.delete(test_id)


__all__ = ["router"]
