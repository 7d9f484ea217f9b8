import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from fundraiser.models import User
from fundraiser.schemas.profile import ProfileOut, SchoolRegistered, StudentRegistered
from fundraiser.schemas.user import (
    SchoolRegister,
    StudentRegister,
    TokenResponse,
    UserCreate,
    UserResponse,
)
from fundraiser.storage import Storage, get_storage
from fundraiser.utils.auth import get_current_user, get_password_hash, verify_password
from fundraiser.utils.stats import get_school_stats, get_student_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def _ensure_unique(storage: Storage, username: str, email: str) -> None:
    if storage.get_user_by_username(username):
        raise HTTPException(status_code=400, detail="Username already exists")
    if storage.get_user_by_email(email):
        raise HTTPException(status_code=400, detail="Email already exists")


def _create_user(storage: Storage, username: str, email: str, password: str, role: str) -> User:
    return storage.create_user({
        "username": username,
        "email": email,
        "password_hash": get_password_hash(password),
        "role": role,
    })


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, storage: Storage = Depends(get_storage)):
    _ensure_unique(storage, payload.username, payload.email)
    user = _create_user(storage, payload.username, payload.email, payload.password, payload.role)
    logger.info("Registered user %s (%s)", user.id, user.role)
    return user


@router.post("/register/school", response_model=SchoolRegistered, status_code=status.HTTP_201_CREATED)
def register_school(payload: SchoolRegister, storage: Storage = Depends(get_storage)):
    _ensure_unique(storage, payload.username, payload.email)

    user = _create_user(storage, payload.username, payload.email, payload.password, "school")
    school = storage.create_school({
        "user_id": user.id,
        "name": payload.school_name,
        "admin_name": payload.admin_name,
        "address": payload.address,
        "phone": payload.phone,
        "fundraising_goal": payload.fundraising_goal,
    })
    logger.info("Registered school %s for user %s", school.id, user.id)
    return {"user": user, "school": school, "access_token": str(user.id)}


@router.post("/register/student", response_model=StudentRegistered, status_code=status.HTTP_201_CREATED)
def register_student(payload: StudentRegister, storage: Storage = Depends(get_storage)):
    if not storage.get_school(payload.school_id):
        raise HTTPException(status_code=400, detail="Selected school does not exist")
    _ensure_unique(storage, payload.username, payload.email)

    user = _create_user(storage, payload.username, payload.email, payload.password, "student")
    student = storage.create_student({
        "user_id": user.id,
        "school_id": payload.school_id,
        "first_name": payload.first_name,
        "last_name": payload.last_name,
        "grade": payload.grade,
        # a zero goal is stored as "no goal"
        "personal_goal": payload.personal_goal or None,
        "parent_consent": payload.parent_consent,
    })
    logger.info("Registered student %s in school %s", student.id, student.school_id)
    return {"user": user, "student": student, "access_token": str(user.id)}


@router.post("/token", response_model=TokenResponse)
def login(form: OAuth2PasswordRequestForm = Depends(), storage: Storage = Depends(get_storage)):
    """
    Simplified login: the access token is the user id.
    """
    user = storage.get_user_by_username(form.username)
    if not user or not verify_password(form.password, user.password_hash):
        logger.warning("Failed login for %s", form.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")
    return {"access_token": str(user.id), "token_type": "bearer"}


@router.get("/user", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)):
    return user


@router.get("/profile", response_model=ProfileOut)
def get_profile(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    """
    Profile by role:
    - school: user, school and school stats
    - student: user, student, their school and student stats
    """
    if user.role == "school":
        school = storage.get_school_by_user_id(user.id)
        if not school:
            raise HTTPException(status_code=404, detail="School profile not found")
        return {"user": user, "school": school, "stats": get_school_stats(storage, school.id)}

    if user.role == "student":
        student = storage.get_student_by_user_id(user.id)
        if not student:
            raise HTTPException(status_code=404, detail="Student profile not found")
        return {
            "user": user,
            "student": student,
            "school": storage.get_school(student.school_id),
            "stats": get_student_stats(storage, student.id),
        }

    raise HTTPException(status_code=400, detail="Unknown user role")
