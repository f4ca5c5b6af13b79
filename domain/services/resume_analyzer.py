"""
Interface for the component that scores a resume against a job.
"""
from abc import ABC, abstractmethod

from domain.schemas import Job, MatchResult


class ResumeAnalyzer(ABC):
    """Abstract base class for resume/job match providers."""

    @abstractmethod
    async def analyze_resume_against_job(self, job: Job, resume_text: str) -> MatchResult:
        """
        Assess how well a resume fits a job.

        Args:
            job: Job whose title, description and requirements form the brief
            resume_text: Raw resume text as submitted

        Returns:
            MatchResult with score, summary and the three finding lists

        Raises:
            AIGatewayError: on transport failure or an unparseable reply
        """
        pass
