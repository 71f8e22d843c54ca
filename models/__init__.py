"""Database models."""

from db import Base

# Import all models so Alembic can detect them
from models.division import Division
from models.admin import Admin
from models.program import Program
from models.program_form_question import ProgramFormQuestion
from models.panchayath import Panchayath
from models.agent import Agent

__all__ = [
    "Base",
    "Division",
    "Admin",
    "Program",
    "ProgramFormQuestion",
    "Panchayath",
    "Agent",
]
