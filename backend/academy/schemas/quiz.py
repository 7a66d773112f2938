"""
Quiz Schemas (Pydantic)
"""

from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from uuid import UUID


class QuizQuestionInput(BaseModel):
    """Câu hỏi với đúng 4 đáp án"""
    question_text: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=4, max_length=4)
    correct_answer_index: int = Field(..., ge=0, le=3)  # Index của đáp án đúng (0-3)


class QuizFormCreate(BaseModel):
    """Tạo quiz và element Form trong chapter"""
    chapter_id: UUID
    title: str = Field(..., min_length=1)
    questions: List[QuizQuestionInput] = []


class QuizQuestionUpdate(QuizQuestionInput):
    id: UUID


class QuizFormUpdate(BaseModel):
    """Cập nhật title và các câu hỏi đã tồn tại (khớp theo id)"""
    title: str = Field(..., min_length=1)
    questions: List[QuizQuestionUpdate] = []


class QuizQuestionResponse(BaseModel):
    id: UUID
    question_text: str
    options: List[str]
    correct_answer_index: int

    class Config:
        from_attributes = True


class QuizFormResponse(BaseModel):
    id: UUID
    title: str
    questions: List[QuizQuestionResponse]

    class Config:
        from_attributes = True


class QuizSubmissionCreate(BaseModel):
    """Bài làm của user"""
    quiz_id: UUID
    answers: List[int]  # Index đáp án đã chọn cho từng câu


class QuizResult(BaseModel):
    """Kết quả quiz"""
    submission_id: UUID
    score: int
    total: int
    percentage: float
    passed: bool
    submitted_at: datetime
    message: str


class QuizSubmissionResponse(BaseModel):
    id: UUID
    quiz_id: UUID
    score: int
    submitted_at: datetime

    class Config:
        from_attributes = True


class HintRequest(BaseModel):
    """Câu hỏi cần gợi ý (không gửi đáp án đúng)"""
    question_text: str = ""
    options: List[str] = []


class HintResponse(BaseModel):
    hint: str
