"""
Course Hierarchy Schemas (Pydantic)
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID


# === Reorder ===

class ReorderItem(BaseModel):
    """Một cặp (id, index) trong request reorder"""
    id: str
    index: int


class ReorderCoursesRequest(BaseModel):
    courses: List[ReorderItem]


class ReorderLessonsRequest(BaseModel):
    lessons: List[ReorderItem]


class ReorderChaptersRequest(BaseModel):
    chapters: List[ReorderItem]


class ReorderElementsRequest(BaseModel):
    elements: List[ReorderItem]


# === Course Schemas ===

class CourseBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=128)
    description: str = Field(default="", max_length=1024)
    base_name: str = Field(default="", max_length=128)
    level: str = Field(default="", max_length=64)
    duration: int = Field(default=0, ge=0)
    tag_names: List[str] = []
    badge_id: Optional[UUID] = None


class CourseCreate(CourseBase):
    """Schema để tạo khóa học mới"""
    pass


class CourseUpdate(CourseBase):
    """Schema để cập nhật khóa học"""
    is_published: bool = False


class CourseResponse(BaseModel):
    """Schema để trả về khóa học"""
    id: UUID
    title: str
    description: str
    base_name: str
    level: str
    duration: int
    is_published: bool
    index: int
    badge_id: Optional[UUID] = None
    tag_names: List[str] = []
    lesson_ids: List[UUID] = []


# === Lesson Schemas ===

class LessonCreate(BaseModel):
    """Schema để tạo lesson mới; index tự động nếu không truyền"""
    learning_course_id: UUID
    title: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = Field(None, max_length=1024)
    duration: Optional[int] = Field(None, ge=0)
    index: Optional[int] = None


class LessonUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=128)
    description: Optional[str] = Field(None, max_length=1024)
    duration: Optional[int] = Field(None, ge=0)


class LessonResponse(BaseModel):
    id: UUID
    learning_course_id: UUID
    index: int
    title: str
    description: Optional[str] = None
    duration: Optional[int] = None

    class Config:
        from_attributes = True


class LessonDetailResponse(LessonResponse):
    """Lesson kèm tên khóa học"""
    course_title: str


# === Chapter Schemas ===

class ChapterCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=128)
    index: Optional[int] = None


class ChapterUpdate(BaseModel):
    title: str = Field(..., min_length=1, max_length=128)


class ChapterResponse(BaseModel):
    id: UUID
    lesson_id: UUID
    index: int
    title: str

    class Config:
        from_attributes = True


class ChapterHierarchyResponse(BaseModel):
    """Vị trí của chapter trong cây khóa học"""
    lesson_id: UUID
    lesson_title: str
    course_id: UUID
    course_title: str


# === Chapter Element Schemas ===

class ChapterElementCreate(BaseModel):
    title: str = Field(default="", max_length=128)
    type: str
    content: Optional[str] = None
    image: Optional[str] = None
    form_id: Optional[UUID] = None
    index: Optional[int] = None


class ChapterElementUpdate(ChapterElementCreate):
    pass


class ChapterElementResponse(BaseModel):
    id: UUID
    chapter_id: UUID
    index: int
    title: str
    type: str
    content: Optional[str] = None
    image: Optional[str] = None
    form_id: Optional[UUID] = None

    class Config:
        from_attributes = True


class ChapterElementsResponse(BaseModel):
    """Chapter kèm danh sách element đã sắp xếp"""
    title: str
    elements: List[ChapterElementResponse]


class CreatedResponse(BaseModel):
    id: UUID
