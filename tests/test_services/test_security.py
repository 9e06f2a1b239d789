"""
Tests for password hashing and session tokens
"""

import pytest
from datetime import timedelta
from jose import jwt

from config import settings
from errors import InvalidTokenError
from models import UserRole
from security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswords:
    
    @pytest.mark.unit
    def test_hash_is_one_way_and_verifiable(self):
        hashed = get_password_hash("hunter2")
        
        assert hashed != "hunter2"
        assert verify_password("hunter2", hashed)
        assert not verify_password("hunter3", hashed)


class TestTokens:
    
    @pytest.mark.unit
    def test_round_trip_carries_identity_and_role(self):
        principal = decode_access_token(create_access_token(7, UserRole.CARETAKER))
        
        assert principal.user_id == 7
        assert principal.role == UserRole.CARETAKER
    
    @pytest.mark.unit
    def test_expired_token_rejected(self):
        token = create_access_token(7, UserRole.PATIENT, expires_delta=timedelta(seconds=-5))
        
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)
    
    @pytest.mark.unit
    def test_foreign_signature_rejected(self):
        token = jwt.encode({"sub": "7", "role": "patient"}, "another-key", algorithm="HS256")
        
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)
    
    @pytest.mark.unit
    def test_unknown_role_rejected(self):
        token = jwt.encode(
            {"sub": "7", "role": "admin"}, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM
        )
        
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)
    
    @pytest.mark.unit
    def test_garbage_rejected(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not-a-token")
