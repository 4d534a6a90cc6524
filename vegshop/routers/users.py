import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from vegshop.core.security import hash_password
from vegshop.db import USERS, VEGETABLES, get_db
from vegshop.models.user import UserCreate, UserOut
from vegshop.models.vegetable import CreatedResponse
from vegshop.routers.dependencies import get_current_user
from vegshop.services.validation import validate_vegetable_ids

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user: UserCreate, db=Depends(get_db)):
    """Create a shop profile. Vendors list the catalog vegetables they supply."""
    existing = await db[USERS].find_one({"email": user.email})
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    check = await validate_vegetable_ids(user.vegetables, db[VEGETABLES])
    if not check.is_valid:
        raise HTTPException(status_code=400, detail=check.error)

    user_dict = user.model_dump(mode="json")
    user_dict["password"] = hash_password(user.password)
    user_dict["createdAt"] = datetime.now(timezone.utc)

    res = await db[USERS].insert_one(user_dict)
    logger.info(f"Created {user.role.value} profile {res.inserted_id}")
    return CreatedResponse(id=str(res.inserted_id), message="User created")


@router.get("/me", response_model=UserOut)
async def read_me(current_user: dict = Depends(get_current_user)):
    data = {k: v for k, v in current_user.items() if k not in ("_id", "password")}
    return UserOut(id=str(current_user["_id"]), **data)
