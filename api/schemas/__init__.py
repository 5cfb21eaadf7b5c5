"""
API schemas package. Import from submodules or from this package.

Example:
    from api.schemas import SubmitQuizRequest, CourseResponse
    from api.schemas.quiz_schemas import SubmitQuizResponse
"""

from api.schemas.auth_schemas import (
    AuthTokenPayload,
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
from api.schemas.course_schemas import (
    CourseResponse,
    CourseListResponse,
    TopicSummary,
    CourseTopicsResponse,
    QuizQuestionView,
    TopicQuizResponse,
)
from api.schemas.user_progress_schemas import (
    EnrolledCourse,
    EnrolledCoursesResponse,
    EnrollResponse,
)
from api.schemas.quiz_schemas import (
    AnswerIn,
    SubmitQuizRequest,
    QuestionOutcomeResponse,
    GradingResponse,
    SubmitQuizResponse,
)
from api.schemas.ai_schemas import (
    DoubtRequest,
    DoubtResponse,
    WeeklyGoal,
    LearningPathResponse,
    ProviderStatusResponse,
)

__all__ = [
    # auth
    "AuthTokenPayload",
    "ChangePasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "RegisterRequest",
    "RegisterResponse",
    # user
    "QuizActivity",
    "UpdateProfileRequest",
    "UserProfile",
    "UserStatsOverview",
    "UserStatsResponse",
    # course
    "CourseResponse",
    "CourseListResponse",
    "TopicSummary",
    "CourseTopicsResponse",
    "QuizQuestionView",
    "TopicQuizResponse",
    # enrollment
    "EnrolledCourse",
    "EnrolledCoursesResponse",
    "EnrollResponse",
    # quiz
    "AnswerIn",
    "SubmitQuizRequest",
    "QuestionOutcomeResponse",
    "GradingResponse",
    "SubmitQuizResponse",
    # ai
    "DoubtRequest",
    "DoubtResponse",
    "WeeklyGoal",
    "LearningPathResponse",
    "ProviderStatusResponse",
]
