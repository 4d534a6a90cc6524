# vegshop/routers/daily_stock.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from vegshop.models.stock import (
    CarryForwardIn,
    CarryForwardResult,
    DailyStockIn,
    DailyStockOut,
    DailyStockReplace,
)
from vegshop.models.vegetable import CreatedResponse, MessageResponse
from vegshop.routers.dependencies import get_stock_service, parse_object_id
from vegshop.services.dates import (
    INVALID_DATE_MESSAGE,
    PREVIOUS_DAY_ALIAS,
    is_valid_date,
    resolve_date_param,
    today,
)
from vegshop.services.stock import DailyStockService, StockNotFound, StockValidationError
from vegshop.services.validation import INVALID_VEGETABLE_ID_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/daily-stock", tags=["daily-stock"])


def require_date(value) -> str:
    if not is_valid_date(value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_DATE_MESSAGE)
    return value


async def validated_entries(service: DailyStockService, vegetables):
    try:
        return await service.validate(vegetables)
    except StockValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_daily_stock(body: DailyStockIn, service: DailyStockService = Depends(get_stock_service)):
    """Create the record for a date (default today) or merge into it.

    Quantities for vegetables already in the record are added together;
    unseen vegetables are appended.
    """
    day = require_date(today() if body.date is None else body.date)
    entries = await validated_entries(service, body.vegetables)
    created = await service.merge(day, entries)
    message = "Daily stock created" if created else "Vegetables merged or appended to daily stock"
    return CreatedResponse(id=day, message=message)


@router.post("/carry-forward", response_model=CarryForwardResult, status_code=status.HTTP_201_CREATED)
async def carry_forward(body: CarryForwardIn, service: DailyStockService = Depends(get_stock_service)):
    day = require_date(today() if body.date is None else body.date)
    try:
        created, entries = await service.carry_forward(day, body.vegetable_ids)
    except StockNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except StockValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    message = "Daily stock created" if created else "Vegetables merged or appended to daily stock"
    return CarryForwardResult(date=day, message=message, carried=len(entries))


@router.get("", response_model=List[DailyStockOut])
async def list_daily_stock(service: DailyStockService = Depends(get_stock_service)):
    return [DailyStockOut.from_document(doc) for doc in await service.list_all()]


@router.get("/{date}", response_model=DailyStockOut)
async def get_daily_stock(date: str, service: DailyStockService = Depends(get_stock_service)):
    day = resolve_date_param(date)
    if day is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_DATE_MESSAGE)
    doc = await service.get(day)
    if not doc:
        label = "previous day" if date == PREVIOUS_DAY_ALIAS else day
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Daily stock not found for {label}")
    return DailyStockOut.from_document(doc)


@router.put("/{date}", response_model=CreatedResponse)
async def replace_daily_stock(
    date: str, body: DailyStockReplace, service: DailyStockService = Depends(get_stock_service)
):
    day = require_date(date)
    entries = await validated_entries(service, body.vegetables)
    created = await service.replace(day, entries)
    return CreatedResponse(id=day, message="Daily stock created" if created else "Daily stock updated")


@router.delete("/{date}", response_model=MessageResponse)
async def delete_daily_stock(date: str, service: DailyStockService = Depends(get_stock_service)):
    day = require_date(date)
    if not await service.delete(day):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Daily stock not found for this date")
    logger.info(f"Deleted daily stock for {day}")
    return MessageResponse(message="Daily stock deleted")


@router.delete("/{date}/vegetable/{vegetable_id}", response_model=MessageResponse)
async def remove_vegetable_from_daily_stock(
    date: str, vegetable_id: str, service: DailyStockService = Depends(get_stock_service)
):
    day = require_date(date)
    parse_object_id(vegetable_id, INVALID_VEGETABLE_ID_MESSAGE)
    try:
        await service.remove_entry(day, vegetable_id)
    except StockNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return MessageResponse(message="Vegetable removed from daily stock")
