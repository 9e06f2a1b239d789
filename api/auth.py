"""
Auth API Router
Signup and login endpoints
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.deps import get_db, services
from api.schemas.auth import SignupRequest, SignupResponse, LoginRequest, LoginResponse
from models import UserRole
from security import create_access_token
from services.access_control import ensure_login_allowed


logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_data: SignupRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user
    
    - **patient**: paired with an available caretaker in the same step;
      fails if no caretaker is free
    - **caretaker**: registered unpaired
    """
    pairing_service = services.get_pairing_service()
    
    if signup_data.role == UserRole.PATIENT:
        result = await pairing_service.assign_caretaker_to_new_patient(
            name=signup_data.name,
            email=signup_data.email,
            password=signup_data.password,
            phone=signup_data.phone,
            db=db
        )
        return SignupResponse(
            message="Patient registered and assigned to caretaker",
            user_id=result.patient_id,
            caretaker_id=result.caretaker_id
        )
    
    caretaker = await pairing_service.register_caretaker(
        name=signup_data.name,
        email=signup_data.email,
        password=signup_data.password,
        phone=signup_data.phone,
        db=db
    )
    return SignupResponse(message="Caretaker registered", user_id=caretaker.id)


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Exchange email, password and role for a bearer token
    
    Caretakers without an assigned patient are refused.
    """
    identity_service = services.get_identity_service()
    
    user = await identity_service.authenticate(
        email=credentials.email,
        password=credentials.password,
        role=credentials.role,
        db=db
    )
    ensure_login_allowed(user, db)
    
    token = create_access_token(user.id, user.role)
    logger.info(f"User {user.id} signed in as {user.role.value}")
    
    return LoginResponse(token=token, user_id=user.id, role=user.role)
