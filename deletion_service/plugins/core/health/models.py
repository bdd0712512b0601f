from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    """Response model for the health probe."""

    status: str
    message: str
    timestamp: str
    uptime: float

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "status": "OK",
                    "message": "Facebook Data Deletion Service is running",
                    "timestamp": "2024-01-01T00:00:00.000Z",
                    "uptime": 12.5,
                }
            ]
        }
    )
