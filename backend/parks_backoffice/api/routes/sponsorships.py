"""Sponsorships — packages, benefits, sponsors, contracts and what contracts sponsor.

Invariants:
    - A (package, benefit), (contract, event) and (contract, asset) pair is linked once (409)
    - Event links need an existing contract and event (404)
    - Asset links need an existing, active ("activo") contract (400) and asset (404)
    - Contract numbers are unique when set (409)
    - Sponsors with contracts and packages used by contracts cannot be deleted (400)

Design Decisions:
    - One router for the whole sponsorship back office; sections mirror the dashboard tabs
    - Display names (sponsor, benefit, event, asset) are joined in, not stored
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from parks_backoffice.api.deps import apply_update, get_or_404
from parks_backoffice.core.domain_types import ContractStatus
from parks_backoffice.core.errors import (
    BusinessRuleError, ConflictError, InvalidInputError, ResourceNotFoundError,
)
from parks_backoffice.infrastructure.database import atomic, get_db
from parks_backoffice.models.asset import Asset
from parks_backoffice.models.event import Event
from parks_backoffice.models.sponsorship import (
    Sponsor, SponsorshipAssetLink, SponsorshipBenefit, SponsorshipContract,
    SponsorshipEventLink, SponsorshipPackage, SponsorshipPackageBenefit,
)
from parks_backoffice.schemas.sponsorship import (
    AssetLinkCreate, AssetLinkResponse, BenefitCreate, BenefitResponse,
    BenefitUpdate, ContractCreate, ContractResponse, ContractUpdate,
    EventLinkCreate, EventLinkResponse, EventLinkUpdate, PackageBenefitCreate,
    PackageBenefitResponse, PackageCreate, PackageResponse, PackageUpdate,
    SponsorCreate, SponsorResponse, SponsorUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["sponsorships"])


async def _count(db: AsyncSession, column, value) -> int:
    return await db.scalar(select(func.count()).where(column == value)) or 0


async def _pair_exists(db: AsyncSession, model, **pair) -> bool:
    query = select(model.id)
    for column, value in pair.items():
        query = query.where(getattr(model, column) == value)
    return (await db.execute(query.limit(1))).first() is not None


# ─── Packages ────────────────────────────────────────────────────

@router.get("/sponsorship-packages", response_model=list[PackageResponse])
async def list_packages(db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(SponsorshipPackage).order_by(SponsorshipPackage.level, SponsorshipPackage.name),
    )
    return result.scalars().all()


@router.get("/sponsorship-packages/{package_id}", response_model=PackageResponse)
async def get_package(package_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, SponsorshipPackage, package_id)


@router.post(
    "/sponsorship-packages", response_model=PackageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_package(body: PackageCreate, db: AsyncSession = Depends(get_db)):
    package = SponsorshipPackage(**body.model_dump())
    db.add(package)
    await db.commit()
    await db.refresh(package)
    return package


@router.put("/sponsorship-packages/{package_id}", response_model=PackageResponse)
async def update_package(
    package_id: int, body: PackageUpdate, db: AsyncSession = Depends(get_db),
):
    package = await get_or_404(db, SponsorshipPackage, package_id)
    apply_update(package, body.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(package)
    return package


@router.delete(
    "/sponsorship-packages/{package_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_package(package_id: int, db: AsyncSession = Depends(get_db)):
    package = await get_or_404(db, SponsorshipPackage, package_id)
    contracts = await _count(db, SponsorshipContract.package_id, package_id)
    if contracts:
        raise BusinessRuleError(
            f"Package is used by {contracts} contract(s)", code="PACKAGE_IN_USE",
        )
    async with atomic(db):
        await db.execute(
            delete(SponsorshipPackageBenefit)
            .where(SponsorshipPackageBenefit.package_id == package_id),
        )
        await db.delete(package)


@router.get(
    "/sponsorship-packages/{package_id}/benefits",
    response_model=list[PackageBenefitResponse],
)
async def list_package_benefits(package_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, SponsorshipPackage, package_id)
    result = await db.execute(
        select(SponsorshipPackageBenefit, SponsorshipBenefit.name)
        .join(SponsorshipBenefit, SponsorshipBenefit.id == SponsorshipPackageBenefit.benefit_id)
        .where(SponsorshipPackageBenefit.package_id == package_id)
        .order_by(SponsorshipBenefit.name),
    )
    return [
        PackageBenefitResponse.model_validate(link).model_copy(
            update={"benefit_name": name},
        )
        for link, name in result.all()
    ]


@router.post(
    "/sponsorship-packages/{package_id}/benefits",
    response_model=PackageBenefitResponse, status_code=status.HTTP_201_CREATED,
)
async def add_package_benefit(
    package_id: int, body: PackageBenefitCreate, db: AsyncSession = Depends(get_db),
):
    await get_or_404(db, SponsorshipPackage, package_id)
    benefit = await db.get(SponsorshipBenefit, body.benefit_id)
    if benefit is None:
        raise InvalidInputError(f"Benefit {body.benefit_id} does not exist", "benefit_id")
    if await _pair_exists(
        db, SponsorshipPackageBenefit, package_id=package_id, benefit_id=body.benefit_id,
    ):
        raise ConflictError("Benefit already included in this package", "benefit_id")
    link = SponsorshipPackageBenefit(package_id=package_id, **body.model_dump())
    db.add(link)
    await db.commit()
    await db.refresh(link)
    return PackageBenefitResponse.model_validate(link).model_copy(
        update={"benefit_name": benefit.name},
    )


@router.delete(
    "/sponsorship-packages/{package_id}/benefits/{benefit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_package_benefit(
    package_id: int, benefit_id: int, db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(SponsorshipPackageBenefit).where(
            SponsorshipPackageBenefit.package_id == package_id,
            SponsorshipPackageBenefit.benefit_id == benefit_id,
        ),
    )
    link = result.scalar_one_or_none()
    if link is None:
        raise ResourceNotFoundError("SponsorshipPackageBenefit", f"{package_id}/{benefit_id}")
    await db.delete(link)
    await db.commit()


# ─── Benefits ────────────────────────────────────────────────────

@router.get("/sponsorship-benefits", response_model=list[BenefitResponse])
async def list_benefits(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(SponsorshipBenefit).order_by(SponsorshipBenefit.name))
    return result.scalars().all()


@router.post(
    "/sponsorship-benefits", response_model=BenefitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_benefit(body: BenefitCreate, db: AsyncSession = Depends(get_db)):
    benefit = SponsorshipBenefit(**body.model_dump())
    db.add(benefit)
    await db.commit()
    await db.refresh(benefit)
    return benefit


@router.put("/sponsorship-benefits/{benefit_id}", response_model=BenefitResponse)
async def update_benefit(
    benefit_id: int, body: BenefitUpdate, db: AsyncSession = Depends(get_db),
):
    benefit = await get_or_404(db, SponsorshipBenefit, benefit_id)
    apply_update(benefit, body.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(benefit)
    return benefit


@router.delete(
    "/sponsorship-benefits/{benefit_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_benefit(benefit_id: int, db: AsyncSession = Depends(get_db)):
    benefit = await get_or_404(db, SponsorshipBenefit, benefit_id)
    async with atomic(db):
        await db.execute(
            delete(SponsorshipPackageBenefit)
            .where(SponsorshipPackageBenefit.benefit_id == benefit_id),
        )
        await db.delete(benefit)


# ─── Sponsors ────────────────────────────────────────────────────

@router.get("/sponsors", response_model=list[SponsorResponse])
async def list_sponsors(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Sponsor).order_by(Sponsor.name))
    return result.scalars().all()


@router.get("/sponsors/{sponsor_id}", response_model=SponsorResponse)
async def get_sponsor(sponsor_id: int, db: AsyncSession = Depends(get_db)):
    return await get_or_404(db, Sponsor, sponsor_id)


@router.post(
    "/sponsors", response_model=SponsorResponse, status_code=status.HTTP_201_CREATED,
)
async def create_sponsor(body: SponsorCreate, db: AsyncSession = Depends(get_db)):
    sponsor = Sponsor(**body.model_dump())
    db.add(sponsor)
    await db.commit()
    await db.refresh(sponsor)
    logger.info(f"Sponsor {sponsor.name} registered")
    return sponsor


@router.put("/sponsors/{sponsor_id}", response_model=SponsorResponse)
async def update_sponsor(
    sponsor_id: int, body: SponsorUpdate, db: AsyncSession = Depends(get_db),
):
    sponsor = await get_or_404(db, Sponsor, sponsor_id)
    apply_update(sponsor, body.model_dump(exclude_unset=True))
    await db.commit()
    await db.refresh(sponsor)
    return sponsor


@router.delete("/sponsors/{sponsor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sponsor(sponsor_id: int, db: AsyncSession = Depends(get_db)):
    sponsor = await get_or_404(db, Sponsor, sponsor_id)
    contracts = await _count(db, SponsorshipContract.sponsor_id, sponsor_id)
    if contracts:
        raise BusinessRuleError(
            f"Sponsor has {contracts} contract(s)", code="SPONSOR_HAS_CONTRACTS",
        )
    await db.delete(sponsor)
    await db.commit()


@router.get("/sponsors/{sponsor_id}/contracts", response_model=list[ContractResponse])
async def list_sponsor_contracts(sponsor_id: int, db: AsyncSession = Depends(get_db)):
    sponsor = await get_or_404(db, Sponsor, sponsor_id)
    result = await db.execute(
        select(SponsorshipContract)
        .where(SponsorshipContract.sponsor_id == sponsor_id)
        .order_by(SponsorshipContract.start_date.desc()),
    )
    return [
        ContractResponse.model_validate(c).model_copy(update={"sponsor_name": sponsor.name})
        for c in result.scalars()
    ]


# ─── Contracts ───────────────────────────────────────────────────

async def _ensure_contract_number_free(
    db: AsyncSession, number: str, exclude_id: int | None = None,
) -> None:
    query = select(SponsorshipContract.id).where(
        SponsorshipContract.contract_number == number,
    )
    if exclude_id is not None:
        query = query.where(SponsorshipContract.id != exclude_id)
    if (await db.execute(query.limit(1))).first():
        raise ConflictError(f"Contract number '{number}' already exists", "contract_number")


async def _contract_response(
    db: AsyncSession, contract: SponsorshipContract,
) -> ContractResponse:
    sponsor = await db.get(Sponsor, contract.sponsor_id)
    return ContractResponse.model_validate(contract).model_copy(
        update={"sponsor_name": sponsor.name if sponsor else None},
    )


@router.get("/sponsorship-contracts", response_model=list[ContractResponse])
async def list_contracts(
    sponsor_id: int | None = None,
    contract_status: ContractStatus | None = None,
    db: AsyncSession = Depends(get_db),
):
    query = (
        select(SponsorshipContract, Sponsor.name)
        .join(Sponsor, Sponsor.id == SponsorshipContract.sponsor_id)
        .order_by(SponsorshipContract.start_date.desc(), SponsorshipContract.id)
    )
    if sponsor_id is not None:
        query = query.where(SponsorshipContract.sponsor_id == sponsor_id)
    if contract_status is not None:
        query = query.where(SponsorshipContract.status == contract_status.value)
    result = await db.execute(query)
    return [
        ContractResponse.model_validate(c).model_copy(update={"sponsor_name": name})
        for c, name in result.all()
    ]


@router.get("/sponsorship-contracts/{contract_id}", response_model=ContractResponse)
async def get_contract(contract_id: int, db: AsyncSession = Depends(get_db)):
    contract = await get_or_404(db, SponsorshipContract, contract_id)
    return await _contract_response(db, contract)


@router.post(
    "/sponsorship-contracts", response_model=ContractResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_contract(body: ContractCreate, db: AsyncSession = Depends(get_db)):
    if await db.get(Sponsor, body.sponsor_id) is None:
        raise InvalidInputError(f"Sponsor {body.sponsor_id} does not exist", "sponsor_id")
    if body.package_id is not None and await db.get(SponsorshipPackage, body.package_id) is None:
        raise InvalidInputError(f"Package {body.package_id} does not exist", "package_id")
    if body.contract_number:
        await _ensure_contract_number_free(db, body.contract_number)
    contract = SponsorshipContract(**body.model_dump())
    db.add(contract)
    await db.commit()
    await db.refresh(contract)
    logger.info(
        f"Contract {contract.contract_number or contract.id} created",
        extra={"contract_id": contract.id},
    )
    return await _contract_response(db, contract)


@router.put("/sponsorship-contracts/{contract_id}", response_model=ContractResponse)
async def update_contract(
    contract_id: int, body: ContractUpdate, db: AsyncSession = Depends(get_db),
):
    contract = await get_or_404(db, SponsorshipContract, contract_id)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("contract_number"):
        await _ensure_contract_number_free(db, changes["contract_number"], contract_id)
    if changes.get("package_id") is not None:
        if await db.get(SponsorshipPackage, changes["package_id"]) is None:
            raise InvalidInputError(
                f"Package {changes['package_id']} does not exist", "package_id",
            )
    start = changes.get("start_date") or contract.start_date
    end = changes.get("end_date") or contract.end_date
    if end < start:
        raise InvalidInputError("end_date cannot be before start_date", "end_date")
    apply_update(contract, changes)
    await db.commit()
    await db.refresh(contract)
    return await _contract_response(db, contract)


@router.delete(
    "/sponsorship-contracts/{contract_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_contract(contract_id: int, db: AsyncSession = Depends(get_db)):
    contract = await get_or_404(db, SponsorshipContract, contract_id)
    async with atomic(db):
        for model in (SponsorshipEventLink, SponsorshipAssetLink):
            await db.execute(delete(model).where(model.contract_id == contract_id))
        await db.delete(contract)
    logger.info("Contract deleted", extra={"contract_id": contract_id})


@router.get(
    "/sponsorship-contracts/{contract_id}/linked-assets",
    response_model=list[AssetLinkResponse],
)
async def list_linked_assets(contract_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, SponsorshipContract, contract_id)
    return await _asset_links(db, SponsorshipAssetLink.contract_id == contract_id)


@router.get(
    "/sponsorship-contracts/{contract_id}/linked-events",
    response_model=list[EventLinkResponse],
)
async def list_linked_events(contract_id: int, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, SponsorshipContract, contract_id)
    return await _event_links(db, SponsorshipEventLink.contract_id == contract_id)


# ─── Event Links ─────────────────────────────────────────────────

async def _event_links(db: AsyncSession, *where) -> list[EventLinkResponse]:
    result = await db.execute(
        select(SponsorshipEventLink, Event.title)
        .join(Event, Event.id == SponsorshipEventLink.event_id)
        .where(*where)
        .order_by(SponsorshipEventLink.id),
    )
    return [
        EventLinkResponse.model_validate(link).model_copy(update={"event_title": title})
        for link, title in result.all()
    ]


@router.get("/sponsorship-events-links", response_model=list[EventLinkResponse])
async def list_event_links(
    contract_id: int | None = None, db: AsyncSession = Depends(get_db),
):
    where = [] if contract_id is None else [SponsorshipEventLink.contract_id == contract_id]
    return await _event_links(db, *where)


@router.post(
    "/sponsorship-events-links", response_model=EventLinkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_event_link(body: EventLinkCreate, db: AsyncSession = Depends(get_db)):
    await get_or_404(db, SponsorshipContract, body.contract_id)
    event = await get_or_404(db, Event, body.event_id)
    if await _pair_exists(
        db, SponsorshipEventLink, contract_id=body.contract_id, event_id=body.event_id,
    ):
        raise ConflictError("Contract already sponsors this event", "event_id")
    link = SponsorshipEventLink(**body.model_dump())
    db.add(link)
    await db.commit()
    await db.refresh(link)
    logger.info(
        f"Contract linked to event {event.title}",
        extra={"contract_id": body.contract_id, "event_id": body.event_id},
    )
    return EventLinkResponse.model_validate(link).model_copy(
        update={"event_title": event.title},
    )


@router.put("/sponsorship-events-links/{link_id}", response_model=EventLinkResponse)
async def update_event_link(
    link_id: int, body: EventLinkUpdate, db: AsyncSession = Depends(get_db),
):
    link = await get_or_404(db, SponsorshipEventLink, link_id)
    apply_update(link, body.model_dump(exclude_unset=True))
    await db.commit()
    return (await _event_links(db, SponsorshipEventLink.id == link_id))[0]


@router.delete(
    "/sponsorship-events-links/{link_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_event_link(link_id: int, db: AsyncSession = Depends(get_db)):
    link = await get_or_404(db, SponsorshipEventLink, link_id)
    await db.delete(link)
    await db.commit()


# ─── Asset Links ─────────────────────────────────────────────────

async def _asset_links(db: AsyncSession, *where) -> list[AssetLinkResponse]:
    result = await db.execute(
        select(SponsorshipAssetLink, Asset.name)
        .join(Asset, Asset.id == SponsorshipAssetLink.asset_id)
        .where(*where)
        .order_by(SponsorshipAssetLink.id),
    )
    return [
        AssetLinkResponse.model_validate(link).model_copy(update={"asset_name": name})
        for link, name in result.all()
    ]


@router.get("/sponsorship-assets", response_model=list[AssetLinkResponse])
async def list_asset_links(
    contract_id: int | None = None, db: AsyncSession = Depends(get_db),
):
    where = [] if contract_id is None else [SponsorshipAssetLink.contract_id == contract_id]
    return await _asset_links(db, *where)


@router.post(
    "/sponsorship-assets", response_model=AssetLinkResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_asset_link(body: AssetLinkCreate, db: AsyncSession = Depends(get_db)):
    contract = await get_or_404(db, SponsorshipContract, body.contract_id)
    if contract.status != ContractStatus.ACTIVO.value:
        raise BusinessRuleError(
            f"Contract is '{contract.status}'; only active contracts can brand assets",
            code="CONTRACT_NOT_ACTIVE",
        )
    asset = await get_or_404(db, Asset, body.asset_id)
    if await _pair_exists(
        db, SponsorshipAssetLink, contract_id=body.contract_id, asset_id=body.asset_id,
    ):
        raise ConflictError("Contract already sponsors this asset", "asset_id")
    link = SponsorshipAssetLink(**body.model_dump())
    db.add(link)
    await db.commit()
    await db.refresh(link)
    return AssetLinkResponse.model_validate(link).model_copy(
        update={"asset_name": asset.name},
    )


@router.delete("/sponsorship-assets/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_asset_link(link_id: int, db: AsyncSession = Depends(get_db)):
    link = await get_or_404(db, SponsorshipAssetLink, link_id)
    await db.delete(link)
    await db.commit()
