from sqlalchemy import Column, Integer, String, Float, JSON, DateTime
from sqlalchemy.orm import relationship
from app.core.base import Base
from datetime import datetime

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # email хранится в нижнем регистре без пробелов (нормализует сервис)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    age = Column(Integer, nullable=True)
    weight = Column(Float, nullable=True)
    height = Column(Float, nullable=True)
    # {"target_weight": ..., "weekly_workouts": ..., "daily_calories": ...}
    goals = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    workouts = relationship("Workout", back_populates="user", cascade="all, delete")
    nutrition_entries = relationship("NutritionEntry", back_populates="user", cascade="all, delete")
