"""
Services Package
"""

from academy.services.auth_service import AuthService
from academy.services.identity_service import Identity, IdentityService, is_allowed
from academy.services.hierarchy_service import HierarchyService, apply_reorder
from academy.services.course_service import CourseService
from academy.services.progress_service import ProgressService
from academy.services.quiz_service import QuizService
from academy.services.badge_service import BadgeService
from academy.services.portfolio_service import PortfolioService
from academy.services.ai_quiz_service import AIQuizService

__all__ = [
    "AuthService",
    "Identity",
    "IdentityService",
    "is_allowed",
    "HierarchyService",
    "apply_reorder",
    "CourseService",
    "ProgressService",
    "QuizService",
    "BadgeService",
    "PortfolioService",
    "AIQuizService",
]
