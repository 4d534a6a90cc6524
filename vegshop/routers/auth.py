import logging

from fastapi import APIRouter, Depends, HTTPException

from vegshop.core.config import Settings, get_settings
from vegshop.core.security import create_access_token, verify_password
from vegshop.db import USERS, get_db
from vegshop.models.user import Token, UserLogin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=Token)
async def login(user: UserLogin, db=Depends(get_db), settings: Settings = Depends(get_settings)):
    db_user = await db[USERS].find_one({"email": user.email})
    if not db_user or not verify_password(user.password, db_user["password"]):
        logger.warning(f"Failed login for {user.email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    access_token = create_access_token({"sub": db_user["email"]}, settings)
    return Token(access_token=access_token)
