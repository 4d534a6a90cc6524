# vegshop/routers/vegetables.py
import logging
from datetime import datetime, timezone
from typing import List

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException, status

from vegshop.db import VEGETABLES, get_db
from vegshop.models.vegetable import CreatedResponse, MessageResponse, VegetableIn, VegetableOut
from vegshop.routers.dependencies import vegetable_object_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vegetables", tags=["vegetables"])


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_vegetable(vegetable: VegetableIn, db=Depends(get_db)):
    doc = vegetable.to_document()
    doc.setdefault("photo", "")
    doc["createdAt"] = datetime.now(timezone.utc)
    res = await db[VEGETABLES].insert_one(doc)
    logger.info(f"Created vegetable {res.inserted_id} ({vegetable.name})")
    return CreatedResponse(id=str(res.inserted_id), message="Vegetable created")


@router.get("", response_model=List[VegetableOut])
async def list_vegetables(db=Depends(get_db)):
    items = []
    async for doc in db[VEGETABLES].find():
        items.append(VegetableOut.from_document(doc))
    return items


@router.get("/{vegetable_id}", response_model=VegetableOut)
async def get_vegetable(obj: ObjectId = Depends(vegetable_object_id), db=Depends(get_db)):
    doc = await db[VEGETABLES].find_one({"_id": obj})
    if not doc:
        raise HTTPException(status_code=404, detail="Vegetable not found")
    return VegetableOut.from_document(doc)


@router.put("/{vegetable_id}", response_model=MessageResponse)
async def update_vegetable(vegetable: VegetableIn, obj: ObjectId = Depends(vegetable_object_id), db=Depends(get_db)):
    update = vegetable.to_document()
    update["updatedAt"] = datetime.now(timezone.utc)
    res = await db[VEGETABLES].update_one({"_id": obj}, {"$set": update})
    if not res.matched_count:
        raise HTTPException(status_code=404, detail="Vegetable not found")
    logger.info(f"Updated vegetable {obj}")
    return MessageResponse(message="Vegetable updated")


@router.delete("/{vegetable_id}", response_model=MessageResponse)
async def delete_vegetable(obj: ObjectId = Depends(vegetable_object_id), db=Depends(get_db)):
    res = await db[VEGETABLES].delete_one({"_id": obj})
    if not res.deleted_count:
        raise HTTPException(status_code=404, detail="Vegetable not found")
    logger.info(f"Deleted vegetable {obj}")
    return MessageResponse(message="Vegetable deleted")
