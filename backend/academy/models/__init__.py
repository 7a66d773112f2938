"""
Models Package
Import tất cả models để SQLAlchemy có thể detect
"""

from academy.models.user import Role, User, UserExternalBadge, user_badges, user_roles
from academy.models.badge import Badge, ExternalBadge
from academy.models.course import (
    Chapter, ChapterElement, ChapterElementType, LearningCourse, Lesson, Tag, course_tags
)
from academy.models.quiz import QuizForm, QuizQuestion, QuizSubmission
from academy.models.portfolio import Portfolio, PortfolioStatus
from academy.models.progress import UserChapter, UserLearningCourse, UserLesson

__all__ = [
    "Role",
    "User",
    "UserExternalBadge",
    "user_badges",
    "user_roles",
    "Badge",
    "ExternalBadge",
    "Chapter",
    "ChapterElement",
    "ChapterElementType",
    "LearningCourse",
    "Lesson",
    "Tag",
    "course_tags",
    "QuizForm",
    "QuizQuestion",
    "QuizSubmission",
    "Portfolio",
    "PortfolioStatus",
    "UserChapter",
    "UserLearningCourse",
    "UserLesson",
]
