"""User API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash

from app.database import get_db
from app.errors import Conflict, Unauthorized
from app.models.user import User
from app.schemas.user import LoginRequest, UserCreate, UserUpdate, UserOut

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Create a user; username and email must be unique."""
    if db.query(User).filter(User.username == payload.username).first():
        raise Conflict("Username already exists")
    if db.query(User).filter(User.email == payload.email).first():
        raise Conflict("Email already exists")

    data = payload.model_dump(exclude={"password"})
    user = User(**data, password_hash=generate_password_hash(payload.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %s (%s, %s)", user.user_id, user.username, user.role.value)
    return user


@router.post("/login", response_model=UserOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Check a username/password pair and return the matching user."""
    user = db.query(User).filter(User.username == payload.username).first()
    if not user or not user.check_password(payload.password):
        logger.info("Failed login for %r", payload.username)
        raise Unauthorized("Invalid username or password")
    logger.info("User %s logged in", user.user_id)
    return user


@router.get("/", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db)):
    """List all users."""
    return db.query(User).order_by(User.username).all()


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Fetch a single user by ID."""
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.patch("/{user_id}", response_model=UserOut)
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)):
    """Update profile fields (partial update). Role cannot be changed."""
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info("Updated user %s", user_id)
    return user
