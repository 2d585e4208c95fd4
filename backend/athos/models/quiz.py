"""
Quiz models for the Athos Explorer application
"""

from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from enum import Enum
import uuid


class QuestionDifficulty(str, Enum):
    EASY = "easy"
    HARD = "hard"


class QuizOption(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    text: str = Field(..., min_length=1)
    is_correct: bool = False


class QuizQuestion(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    text: str = Field(..., min_length=1)
    options: List[QuizOption] = Field(..., min_length=1)
    difficulty: QuestionDifficulty = QuestionDifficulty.EASY


class QuizCreate(BaseModel):
    module_id: int = Field(..., ge=1, le=3, description="Module the quiz belongs to")
    title: str = Field(..., min_length=1, max_length=200)
    questions: List[QuizQuestion] = Field(default_factory=list)


class Quiz(QuizCreate):
    id: str = Field(..., description="Unique quiz ID")
    created_at: datetime = Field(..., description="Creation timestamp")

    class Config:
        from_attributes = True


# Learner-facing views: options never carry the correctness flag


class LearnerOption(BaseModel):
    id: str
    text: str


class LearnerQuestion(BaseModel):
    id: str
    text: str
    options: List[LearnerOption]
    difficulty: QuestionDifficulty


class LearnerQuiz(BaseModel):
    id: str
    module_id: int
    title: str
    questions: List[LearnerQuestion]
    created_at: datetime

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> "LearnerQuiz":
        return cls(
            id=quiz.id,
            module_id=quiz.module_id,
            title=quiz.title,
            created_at=quiz.created_at,
            questions=[
                LearnerQuestion(
                    id=q.id,
                    text=q.text,
                    difficulty=q.difficulty,
                    options=[LearnerOption(id=o.id, text=o.text) for o in q.options],
                )
                for q in quiz.questions
            ],
        )


class AnswerSubmission(BaseModel):
    question_id: str
    selected_option: int = Field(..., ge=0, description="Index of the chosen option")


class QuizSubmission(BaseModel):
    answers: List[AnswerSubmission]


class AnswerResult(BaseModel):
    question_id: str
    is_correct: bool


class QuizSubmissionResult(BaseModel):
    quiz_id: str
    score: float
    correct_answers: int
    total_questions: int
    results: List[AnswerResult]
