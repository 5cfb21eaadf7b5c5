from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import User
from api.schemas.auth_schemas import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
)
from api.schemas.user_schemas import (
    QuizActivity,
    UpdateProfileRequest,
    UserProfile,
    UserStatsOverview,
    UserStatsResponse,
)
from api.utils.auth import (
    authenticate_user,
    clear_auth_cookie,
    create_user,
    get_current_user,
    get_user_by_email,
    set_auth_cookie,
)
from api.utils.common import (
    apply_gamification_state,
    attempt_to_history,
    display_name,
    enrollment_to_record,
    gamification_state,
    iso_date,
    iso_format,
)
from api.utils.jwt import get_password_hash, verify_password
from api.utils.logger import configure_logging
from learning.grading.gamification import touch_streak
from learning.grading.stats import summarize_stats

auth_routes = APIRouter()
logger = configure_logging()


def _touch_activity(user: User, db: Session) -> int:
    state = gamification_state(user)
    streak = touch_streak(state, datetime.utcnow().date())
    apply_gamification_state(user, state)
    db.add(user)
    db.commit()
    return streak


def _profile(user: User) -> UserProfile:
    return UserProfile(
        id=user.id,
        name=display_name(user),
        email=user.email,
        phone=user.phone,
        role=user.role,
        skill_level=user.skill_level,
        preferences=user.preferences or {},
        points=int(user.points or 0),
        streak_count=int(user.streak_count or 0),
        last_activity_date=iso_date(user.last_activity_date),
        total_study_time=int(user.total_study_time or 0),
        enrolled_courses=len(user.enrollments),
        created_at=iso_format(user.created_at),
    )


@auth_routes.post("/register", status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, response: Response, db: Session = Depends(get_db)) -> RegisterResponse:
    """Register a new learner and start their streak."""
    if get_user_by_email(request.email, db):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    user = create_user(request.name, request.email, request.password, db, phone=request.phone)
    streak = _touch_activity(user, db)
    set_auth_cookie(response, user)
    return RegisterResponse(message="Registration successful", user_id=user.id, streak_count=streak)


@auth_routes.post("/login")
def login(request: LoginRequest, response: Response, db: Session = Depends(get_db)) -> LoginResponse:
    """Authenticate user, update the streak and set the HTTP-only cookie."""
    user = authenticate_user(request.email, request.password, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )
    if user.account_status != "active":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account has been suspended. Please contact support.",
        )

    streak = _touch_activity(user, db)
    set_auth_cookie(response, user)
    logger.info("login user=%s streak=%s", user.id, streak)
    return LoginResponse(
        message="Login successful",
        token_set=True,
        streak_count=streak,
        points=int(user.points or 0),
        enrolled_courses=len(user.enrollments),
    )


@auth_routes.post("/logout")
def logout(response: Response) -> LogoutResponse:
    """Clear the authentication cookie."""
    clear_auth_cookie(response)
    return LogoutResponse(message="Logout successful - cookie cleared")


@auth_routes.get("/me")
def get_current_user_info(current_user: User = Depends(get_current_user)) -> UserProfile:
    return _profile(current_user)


@auth_routes.put("/profile")
def update_profile(
    req: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserProfile:
    if req.name is not None:
        name = req.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Name cannot be empty")
        current_user.name = name
    if req.phone is not None:
        current_user.phone = req.phone.strip() or None
    if req.preferences is not None:
        merged = dict(current_user.preferences or {})
        merged.update(req.preferences)
        current_user.preferences = merged
    db.add(current_user)
    db.commit()
    db.refresh(current_user)
    return _profile(current_user)


@auth_routes.put("/change-password")
def change_password(
    req: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    if not verify_password(req.current_password, current_user.hashed_password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    current_user.hashed_password = get_password_hash(req.new_password)
    db.add(current_user)
    db.commit()
    logger.info("password changed user=%s", current_user.id)
    return {"message": "Password changed successfully"}


@auth_routes.get("/stats")
def get_stats(current_user: User = Depends(get_current_user)) -> UserStatsResponse:
    """Learner dashboard numbers; recent_activity is newest first."""
    history = [attempt_to_history(a) for a in current_user.quiz_attempts]
    enrollments = [enrollment_to_record(e) for e in current_user.enrollments]
    stats = summarize_stats(
        history,
        enrollments,
        gamification_state(current_user),
        total_study_time=int(current_user.total_study_time or 0),
    )
    recent = stats.pop("recent_activity")
    return UserStatsResponse(
        overview=UserStatsOverview(**stats),
        skill_level=current_user.skill_level,
        recent_activity=[
            QuizActivity(
                topic_id=h.topic_id,
                topic_title=h.topic_title,
                score=h.score_percent,
                total_questions=h.total_questions,
                correct_answers=h.correct_count,
                time_spent_seconds=h.time_spent_seconds,
                difficulty=h.difficulty.value,
                weak_areas=list(h.weak_areas),
                completed_at=iso_format(h.completed_at) if h.completed_at else None,
            )
            for h in recent
        ],
    )
