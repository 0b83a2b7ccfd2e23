"""Instructors — activity instructors, their park assignments and evaluations.

Invariants:
    - full_name is derived from first/last names unless given explicitly
    - Instructor emails are unique (409)
    - rating is the mean evaluation score (1-5), recomputed on every new evaluation
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import apply_update, get_or_404
from parks_backoffice.core.errors import ConflictError, InvalidInputError
from parks_backoffice.infrastructure.database import atomic, get_db
from parks_backoffice.models.instructor import (
    Instructor, InstructorAssignment, InstructorEvaluation,
)
from parks_backoffice.models.park import Park
from parks_backoffice.schemas.instructor import (
    AssignmentCreate, AssignmentResponse, EvaluationCreate, EvaluationResponse,
    InstructorCreate, InstructorResponse, InstructorUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/instructors", tags=["instructors"])


def _full_name(first_name: str, last_name: str) -> str:
    return f"{first_name.strip()} {last_name.strip()}".strip()


async def _ensure_email_free(
    db: AsyncSession, email: str, exclude_id: int | None = None,
) -> None:
    query = select(Instructor.id).where(func.lower(Instructor.email) == email.lower())
    if exclude_id is not None:
        query = query.where(Instructor.id != exclude_id)
    if (await db.execute(query.limit(1))).first():
        raise ConflictError(f"Email '{email}' already registered", "email")


async def _check_park(db: AsyncSession, park_id: int | None, field: str) -> None:
    if park_id is None:
        return
    park = await db.get(Park, park_id)
    if park is None or park.is_deleted:
        raise InvalidInputError(f"Park {park_id} does not exist", field)


async def _responses(
    db: AsyncSession, instructors: list[Instructor],
) -> list[InstructorResponse]:
    park_ids = {i.preferred_park_id for i in instructors if i.preferred_park_id}
    names: dict[int, str] = {}
    if park_ids:
        result = await db.execute(
            select(Park.id, Park.name).where(Park.id.in_(park_ids)),
        )
        names = dict(result.all())
    return [
        InstructorResponse.model_validate(i).model_copy(
            update={"preferred_park_name": names.get(i.preferred_park_id)},
        )
        for i in instructors
    ]


# ─── Instructors ─────────────────────────────────────────────────

@router.get("", response_model=list[InstructorResponse])
async def list_instructors(
    status_filter: str | None = Query(None, alias="status"),
    search: str | None = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    query = select(Instructor).order_by(Instructor.full_name)
    if status_filter:
        query = query.where(Instructor.status == status_filter)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            Instructor.full_name.ilike(pattern),
            Instructor.email.ilike(pattern),
        ))
    return await _responses(db, list((await db.execute(query)).scalars()))


@router.get("/{instructor_id}", response_model=InstructorResponse)
async def get_instructor(instructor_id: int, db: AsyncSession = Depends(get_db)):
    instructor = await get_or_404(db, Instructor, instructor_id)
    return (await _responses(db, [instructor]))[0]


@router.post("", response_model=InstructorResponse, status_code=status.HTTP_201_CREATED)
async def create_instructor(body: InstructorCreate, db: AsyncSession = Depends(get_db)):
    await _ensure_email_free(db, body.email)
    await _check_park(db, body.preferred_park_id, "preferred_park_id")
    data = body.model_dump(exclude_none=True)
    data["full_name"] = body.full_name or _full_name(body.first_name, body.last_name)
    instructor = Instructor(**data)
    db.add(instructor)
    await db.commit()
    await db.refresh(instructor)
    logger.info(f"Instructor {instructor.full_name} registered")
    return (await _responses(db, [instructor]))[0]


@router.put("/{instructor_id}", response_model=InstructorResponse)
async def update_instructor(
    instructor_id: int, body: InstructorUpdate, db: AsyncSession = Depends(get_db),
):
    instructor = await get_or_404(db, Instructor, instructor_id)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("email"):
        await _ensure_email_free(db, changes["email"], exclude_id=instructor_id)
    if "preferred_park_id" in changes:
        await _check_park(db, changes["preferred_park_id"], "preferred_park_id")
    if "specialties" in changes and changes["specialties"] is None:
        changes["specialties"] = []
    if not changes.get("full_name") and ("first_name" in changes or "last_name" in changes):
        changes["full_name"] = _full_name(
            changes.get("first_name") or instructor.first_name,
            changes.get("last_name") or instructor.last_name,
        )
    apply_update(instructor, changes)
    await db.commit()
    await db.refresh(instructor)
    return (await _responses(db, [instructor]))[0]


@router.delete("/{instructor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_instructor(instructor_id: int, db: AsyncSession = Depends(get_db)):
    instructor = await get_or_404(db, Instructor, instructor_id)
    async with atomic(db):
        for model in (InstructorEvaluation, InstructorAssignment):
            rows = await db.execute(
                select(model).where(model.instructor_id == instructor_id),
            )
            for row in rows.scalars():
                await db.delete(row)
        await db.delete(instructor)


# ─── Assignments ─────────────────────────────────────────────────

@router.get("/{instructor_id}/assignments", response_model=list[AssignmentResponse])
async def list_assignments(instructor_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Instructor, instructor_id)
    result = await db.execute(
        select(InstructorAssignment)
        .where(InstructorAssignment.instructor_id == instructor_id)
        .order_by(InstructorAssignment.start_date.desc()),
    )
    return result.scalars().all()


@router.post(
    "/{instructor_id}/assignments", response_model=AssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_assignment(
    instructor_id: int, body: AssignmentCreate, db: AsyncSession = Depends(get_db),
):
    await get_or_404(db, Instructor, instructor_id)
    await _check_park(db, body.park_id, "park_id")
    if body.end_date and body.end_date < body.start_date:
        raise InvalidInputError("end_date cannot be before start_date", "end_date")
    assignment = InstructorAssignment(instructor_id=instructor_id, **body.model_dump())
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)
    return assignment


# ─── Evaluations ─────────────────────────────────────────────────

@router.get("/{instructor_id}/evaluations", response_model=list[EvaluationResponse])
async def list_evaluations(instructor_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, Instructor, instructor_id)
    result = await db.execute(
        select(InstructorEvaluation)
        .where(InstructorEvaluation.instructor_id == instructor_id)
        .order_by(InstructorEvaluation.evaluation_date.desc(), InstructorEvaluation.id.desc()),
    )
    return result.scalars().all()


@router.post(
    "/{instructor_id}/evaluations", response_model=EvaluationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_evaluation(
    instructor_id: int, body: EvaluationCreate, db: AsyncSession = Depends(get_db),
):
    instructor = await get_or_404(db, Instructor, instructor_id)
    if body.assignment_id is not None:
        assignment = await db.get(InstructorAssignment, body.assignment_id)
        if assignment is None or assignment.instructor_id != instructor_id:
            raise InvalidInputError(
                f"Assignment {body.assignment_id} does not belong to this instructor",
                "assignment_id",
            )
    evaluation = InstructorEvaluation(
        instructor_id=instructor_id, **body.model_dump(exclude_none=True),
    )
    async with atomic(db):
        db.add(evaluation)
        await db.flush()
        mean = await db.scalar(
            select(func.avg(InstructorEvaluation.score))
            .where(InstructorEvaluation.instructor_id == instructor_id),
        )
        instructor.rating = round(float(mean), 2)
    await db.refresh(evaluation)
    logger.info(
        f"Instructor {instructor_id} rated {body.score}; rating now {instructor.rating}",
    )
    return evaluation
