import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Float, Enum, Index
from sqlalchemy.orm import relationship
from app.core.base import Base

class WorkoutTypeEnum(str, enum.Enum):
    cardio = "cardio"
    strength = "strength"
    flexibility = "flexibility"
    sports = "sports"
    other = "other"

class Workout(Base):
    __tablename__ = "workouts"
    __table_args__ = (
        Index("ix_workouts_user_date", "user_id", "date"),
        Index("ix_workouts_user_type", "user_id", "type"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(Enum(WorkoutTypeEnum), nullable=False)
    # Суммы по упражнениям, считаются при создании и в БД не пересчитываются
    duration = Column(Float, nullable=False, default=0)
    total_calories = Column(Float, nullable=False, default=0)
    date = Column(DateTime, nullable=False, index=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="workouts")
    exercises = relationship(
        "Exercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Exercise.position",
        lazy="selectin",
    )

class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(Integer, primary_key=True)
    workout_id = Column(Integer, ForeignKey("workouts.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    sets = Column(Integer, default=0, nullable=False)
    reps = Column(Integer, default=0, nullable=False)
    weight = Column(Float, nullable=True)
    duration = Column(Float, nullable=True)
    calories_burned = Column(Float, nullable=True)

    workout = relationship("Workout", back_populates="exercises")
