from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from infra.db.session import Base


class JobRecord(Base):
    __tablename__ = "jobs"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    department = Column(String, nullable=True)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)


class ResumeRecord(Base):
    __tablename__ = "resumes"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_name = Column(String, nullable=False)
    file_name = Column(String, nullable=True)
    content = Column(Text, nullable=False)   # raw pasted resume text
    created_at = Column(DateTime, server_default=func.now(), nullable=False)


class AnalysisRecord(Base):
    __tablename__ = "analyses"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), nullable=False, index=True)
    resume_id = Column(Integer, ForeignKey("resumes.id"), nullable=False)
    match_score = Column(Integer, nullable=True)   # 0-100
    summary = Column(Text, nullable=True)
    strengths = Column(JSON, nullable=False, default=list)
    weaknesses = Column(JSON, nullable=False, default=list)
    missing_qualifications = Column(JSON, nullable=False, default=list)
    status = Column(String, nullable=False, default="pending")   # 'pending' | 'completed' | 'failed'
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
