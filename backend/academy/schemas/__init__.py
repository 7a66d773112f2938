"""
Schemas Package
"""

from academy.schemas.user import (
    IdentityResponse,
    RefreshTokenRequest,
    Token,
    UserCreate,
    UserLogin,
    UserResponse,
)
from academy.schemas.course import (
    ChapterCreate,
    ChapterElementCreate,
    ChapterElementResponse,
    ChapterElementsResponse,
    ChapterElementUpdate,
    ChapterHierarchyResponse,
    ChapterResponse,
    ChapterUpdate,
    CourseCreate,
    CourseResponse,
    CourseUpdate,
    CreatedResponse,
    LessonCreate,
    LessonDetailResponse,
    LessonResponse,
    LessonUpdate,
    ReorderChaptersRequest,
    ReorderCoursesRequest,
    ReorderElementsRequest,
    ReorderItem,
    ReorderLessonsRequest,
)
from academy.schemas.quiz import (
    HintRequest,
    HintResponse,
    QuizFormCreate,
    QuizFormResponse,
    QuizFormUpdate,
    QuizQuestionInput,
    QuizQuestionUpdate,
    QuizResult,
    QuizSubmissionCreate,
    QuizSubmissionResponse,
)
from academy.schemas.badge import (
    BadgeCreate,
    BadgeIconUpdate,
    BadgeResponse,
    ExternalBadgeCreate,
    ExternalBadgeResponse,
)
from academy.schemas.portfolio import PortfolioCreate, PortfolioResponse, PortfolioReview
from academy.schemas.progress import (
    ChapterProgressResponse,
    CompleteChapterResponse,
    CourseProgressResponse,
    LessonProgressResponse,
)

__all__ = [
    "IdentityResponse",
    "RefreshTokenRequest",
    "Token",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "ChapterCreate",
    "ChapterElementCreate",
    "ChapterElementResponse",
    "ChapterElementsResponse",
    "ChapterElementUpdate",
    "ChapterHierarchyResponse",
    "ChapterResponse",
    "ChapterUpdate",
    "CourseCreate",
    "CourseResponse",
    "CourseUpdate",
    "CreatedResponse",
    "LessonCreate",
    "LessonDetailResponse",
    "LessonResponse",
    "LessonUpdate",
    "ReorderChaptersRequest",
    "ReorderCoursesRequest",
    "ReorderElementsRequest",
    "ReorderItem",
    "ReorderLessonsRequest",
    "HintRequest",
    "HintResponse",
    "QuizFormCreate",
    "QuizFormResponse",
    "QuizFormUpdate",
    "QuizQuestionInput",
    "QuizQuestionUpdate",
    "QuizResult",
    "QuizSubmissionCreate",
    "QuizSubmissionResponse",
    "BadgeCreate",
    "BadgeIconUpdate",
    "BadgeResponse",
    "ExternalBadgeCreate",
    "ExternalBadgeResponse",
    "PortfolioCreate",
    "PortfolioResponse",
    "PortfolioReview",
    "ChapterProgressResponse",
    "CompleteChapterResponse",
    "CourseProgressResponse",
    "LessonProgressResponse",
]
