from pydantic import BaseModel


class ErrorResponse(BaseModel):
    success: bool = False
    message: str


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
    404: {"model": ErrorResponse, "description": "Unknown resource"},
    409: {"model": ErrorResponse, "description": "Conflicting resource"},
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
    503: {"model": ErrorResponse, "description": "Storage temporarily unavailable"},
}


class ServiceInfo(BaseModel):
    message: str
    version: str
