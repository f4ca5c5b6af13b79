from typing import Optional


class AppError(Exception):
    """Base for errors that map onto an HTTP status and a JSON body."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"message": self.message}


class ValidationError(AppError):
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def to_payload(self) -> dict:
        return {"message": self.message, "field": self.field}


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class AIGatewayError(AppError):
    """Transport failure or unusable reply from the completion provider."""

    status_code = 502


class AnalysisFailedError(AppError):
    status_code = 500

    def __init__(self, analysis_id: int, message: str = "AI Analysis failed"):
        super().__init__(message)
        self.analysis_id = analysis_id


class AnalysisStateError(AppError):
    status_code = 409

    def __init__(self, analysis_id: int, status: Optional[str]):
        super().__init__(
            f"Analysis {analysis_id} is already {status} and cannot be updated")
        self.analysis_id = analysis_id
        self.status = status
