"""
User Progress Schemas (Pydantic)
"""

from pydantic import BaseModel


class ChapterProgressResponse(BaseModel):
    is_completed: bool


class CompleteChapterResponse(BaseModel):
    message: str
    badge_awarded: bool


class LessonProgressResponse(BaseModel):
    total_chapters: int
    completed_chapters: int
    progress_percentage: float
    is_completed: bool


class CourseProgressResponse(BaseModel):
    total_lessons: int
    completed_lessons: int
    progress_percentage: float
    is_completed: bool
