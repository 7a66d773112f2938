"""
Quiz Controllers - quiz forms và bài làm
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from academy.config import Settings, get_settings
from academy.controllers.dependencies import get_ai_quiz_service, get_current_identity, require_admin
from academy.database import get_db
from academy.schemas.course import CreatedResponse
from academy.schemas.quiz import (
    HintRequest,
    HintResponse,
    QuizFormCreate,
    QuizFormResponse,
    QuizFormUpdate,
    QuizResult,
    QuizSubmissionCreate,
    QuizSubmissionResponse,
)
from academy.services.ai_quiz_service import AIQuizService
from academy.services.identity_service import Identity
from academy.services.quiz_service import QuizService

form_router = APIRouter(prefix="/QuizForm", tags=["Quiz Forms"])
submission_router = APIRouter(prefix="/QuizSubmission", tags=["Quiz Submissions"])
question_router = APIRouter(
    prefix="/QuizQuestion", tags=["Quiz Questions"], dependencies=[Depends(get_current_identity)]
)


@form_router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_quiz(form_data: QuizFormCreate, db: Session = Depends(get_db)):
    """Tạo quiz và thêm element Form vào cuối chapter"""
    quiz = QuizService.create_form(db, form_data)
    return CreatedResponse(id=quiz.id)


@form_router.get("/{form_id}", response_model=QuizFormResponse)
def get_quiz(form_id: UUID, db: Session = Depends(get_db)):
    return QuizService.get_form(db, form_id)


@form_router.put("/{form_id}", response_model=QuizFormResponse, dependencies=[Depends(require_admin)])
def update_quiz(form_id: UUID, form_data: QuizFormUpdate, db: Session = Depends(get_db)):
    return QuizService.update_form(db, form_id, form_data)


@submission_router.post("", response_model=QuizResult)
def submit_quiz(
    submission: QuizSubmissionCreate,
    identity: Identity = Depends(get_current_identity),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
):
    """Nộp bài và nhận kết quả; mọi lần nộp đều được lưu"""
    return QuizService.submit(db, identity.user_id, submission, settings.QUIZ_PASS_PERCENTAGE)


@submission_router.get("/quiz/{quiz_id}", response_model=List[QuizSubmissionResponse])
def get_my_submissions(
    quiz_id: UUID,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """Lịch sử làm quiz của user hiện tại, mới nhất trước"""
    return QuizService.get_submissions(db, identity.user_id, quiz_id)


@question_router.post("/hint", response_model=HintResponse)
def get_hint(request: HintRequest, ai_service: AIQuizService = Depends(get_ai_quiz_service)):
    """Gợi ý từ AI, không tiết lộ đáp án"""
    return HintResponse(hint=ai_service.hint(request.question_text, request.options))
