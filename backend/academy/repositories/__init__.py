"""
Repositories Package
"""

from academy.repositories.user_repository import RoleRepository, UserRepository
from academy.repositories.course_repository import CourseRepository, TagRepository
from academy.repositories.lesson_repository import LessonRepository
from academy.repositories.chapter_repository import ChapterElementRepository, ChapterRepository
from academy.repositories.quiz_repository import QuizFormRepository, QuizSubmissionRepository
from academy.repositories.badge_repository import BadgeRepository, ExternalBadgeRepository
from academy.repositories.portfolio_repository import PortfolioRepository
from academy.repositories.progress_repository import ProgressRepository

__all__ = [
    "RoleRepository",
    "UserRepository",
    "CourseRepository",
    "TagRepository",
    "LessonRepository",
    "ChapterElementRepository",
    "ChapterRepository",
    "QuizFormRepository",
    "QuizSubmissionRepository",
    "BadgeRepository",
    "ExternalBadgeRepository",
    "PortfolioRepository",
    "ProgressRepository",
]
