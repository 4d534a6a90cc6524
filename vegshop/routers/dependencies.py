# vegshop/routers/dependencies.py
from bson import ObjectId
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from vegshop.core.config import Settings, get_settings
from vegshop.core.security import decode_access_token
from vegshop.db import USERS, get_db
from vegshop.services.stock import DailyStockService
from vegshop.services.validation import INVALID_ID_MESSAGE, is_valid_object_id

bearer_scheme = HTTPBearer(auto_error=False)


def parse_object_id(value: str, message: str = INVALID_ID_MESSAGE) -> ObjectId:
    if not is_valid_object_id(value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
    return ObjectId(value)


def vegetable_object_id(vegetable_id: str) -> ObjectId:
    """Path dependency; rejects a malformed id before the body is looked at."""
    return parse_object_id(vegetable_id)


async def get_stock_service(request: Request, db=Depends(get_db)) -> DailyStockService:
    return DailyStockService(db, request.app.state.stock_locks)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db=Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> dict:
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized
    email = decode_access_token(credentials.credentials, settings)
    if not email:
        raise unauthorized
    user = await db[USERS].find_one({"email": email})
    if not user:
        raise unauthorized
    return user
