"""
Identity Service
User records: creation and credential lookup
"""

import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

import models
from models import UserRole
from errors import DuplicateEmailError, InvalidCredentialsError, UserNotFoundError
from security import get_password_hash, verify_password


logger = logging.getLogger(__name__)


class IdentityService:
    """
    Service for user account operations
    """
    
    def add_user(
        self,
        session: Session,
        name: str,
        email: str,
        password: str,
        phone: str,
        role: UserRole
    ) -> models.User:
        """
        Stage a new user in the session and flush it to obtain an id.
        The caller owns the transaction (commit/rollback).
        
        Raises:
            DuplicateEmailError: email already registered
        """
        existing = session.query(models.User.id).filter(
            models.User.email == email
        ).first()
        if existing:
            raise DuplicateEmailError()
        
        user = models.User(
            name=name,
            email=email,
            password_hash=get_password_hash(password),
            phone=phone,
            role=role
        )
        session.add(user)
        
        try:
            session.flush()
        except IntegrityError:
            # Lost a race on the unique email index
            session.rollback()
            raise DuplicateEmailError()
        
        return user
    
    async def create_user(
        self,
        name: str,
        email: str,
        password: str,
        phone: str,
        role: UserRole,
        db: Session
    ) -> models.User:
        """
        Create and commit a user with no pairing step
        
        Args:
            name: Display name
            email: Login email (unique)
            password: Plain password, stored hashed
            phone: Contact phone
            role: patient or caretaker
            db: Database session
            
        Returns:
            Created User object
        """
        user = self.add_user(db, name, email, password, phone, role)
        db.commit()
        db.refresh(user)
        
        logger.info(f"Registered {role.value} user {user.id}")
        return user
    
    async def get_user(self, user_id: int, db: Session) -> models.User:
        """Get user by ID or raise UserNotFoundError"""
        user = db.get(models.User, user_id)
        if not user:
            raise UserNotFoundError(f"User {user_id} not found")
        return user
    
    async def find_user_by_credential(
        self,
        email: str,
        role: UserRole,
        db: Session
    ) -> Optional[models.User]:
        """Find the account registered under email with the given role"""
        return db.query(models.User).filter(
            models.User.email == email,
            models.User.role == role
        ).first()
    
    async def authenticate(
        self,
        email: str,
        password: str,
        role: UserRole,
        db: Session
    ) -> models.User:
        """
        Check credentials and return the matching user.
        Unknown users and wrong passwords both raise InvalidCredentialsError.
        """
        user = await self.find_user_by_credential(email, role, db)
        if not user:
            logger.info(f"Login rejected: no {role.value} account for {email}")
            raise InvalidCredentialsError("User not found")
        
        if not verify_password(password, user.password_hash):
            logger.info(f"Login rejected: bad password for user {user.id}")
            raise InvalidCredentialsError()
        
        return user


# Singleton instance
identity_service = IdentityService()
