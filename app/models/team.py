from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.ext.mutable import MutableList

from app.database import Base
from app.models.mixins import DeletedByMixin, SoftDeleteMixin, new_id


class Team(Base):
    __tablename__ = "teams"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    # weak pointer: cleared when the project goes away, never cascaded
    assigned_project_id = Column(
        String,
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class TeamMember(SoftDeleteMixin, DeletedByMixin, Base):
    __tablename__ = "team_members"

    id = Column(String, primary_key=True, default=new_id)
    team_id = Column(String, ForeignKey("teams.id"), nullable=True, index=True)
    name = Column(String, nullable=False)
    contact = Column(String, nullable=True)
    age = Column(Integer, nullable=True)
    skills = Column(MutableList.as_mutable(ARRAY(Text)), nullable=False, default=list, server_default="{}")
    employment_status = Column(String, nullable=False, default="Full-Time")
    rate_type = Column(String, nullable=True)
    rate_amount = Column(Numeric(12, 2), nullable=False, default=0)
    photo_url = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)
