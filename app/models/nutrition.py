from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.base import Base

class NutritionEntry(Base):
    __tablename__ = "nutrition_entries"
    # Не больше одной записи питания на пользователя за календарный день
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_nutrition_user_date"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    total_calories = Column(Float, nullable=False, default=0)
    total_protein = Column(Float, nullable=False, default=0)
    total_carbs = Column(Float, nullable=False, default=0)
    total_fats = Column(Float, nullable=False, default=0)
    water_intake = Column(Integer, nullable=False, default=0)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="nutrition_entries")
    meals = relationship(
        "Meal",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="Meal.position",
        lazy="selectin",
    )

class Meal(Base):
    __tablename__ = "meals"

    id = Column(Integer, primary_key=True)
    entry_id = Column(Integer, ForeignKey("nutrition_entries.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    calories = Column(Float, nullable=False)
    protein = Column(Float, nullable=False)
    carbs = Column(Float, nullable=False)
    fats = Column(Float, nullable=False)
    time = Column(DateTime, nullable=False)

    entry = relationship("NutritionEntry", back_populates="meals")
