"""
Controllers Package
"""

from academy.controllers.auth import router as auth_router
from academy.controllers.courses import router as courses_router
from academy.controllers.lessons import router as lessons_router
from academy.controllers.chapters import router as chapters_router
from academy.controllers.chapter_elements import router as chapter_elements_router
from academy.controllers.quizzes import form_router as quiz_forms_router
from academy.controllers.quizzes import submission_router as quiz_submissions_router
from academy.controllers.quizzes import question_router as quiz_questions_router
from academy.controllers.badges import router as badges_router
from academy.controllers.badges import external_router as external_badges_router
from academy.controllers.portfolio import router as portfolio_router
from academy.controllers.progress import router as progress_router
from academy.controllers.tags import router as tags_router

__all__ = [
    "auth_router",
    "courses_router",
    "lessons_router",
    "chapters_router",
    "chapter_elements_router",
    "quiz_forms_router",
    "quiz_submissions_router",
    "quiz_questions_router",
    "badges_router",
    "external_badges_router",
    "portfolio_router",
    "progress_router",
    "tags_router",
]
