from pydantic import BaseModel, ConfigDict


class ServiceInfo(BaseModel):
    """Static description of the service and the routes it exposes."""

    service: str
    version: str
    description: str
    endpoints: dict[str, str]

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "service": "Facebook Data Deletion Callback",
                    "version": "1.0.0",
                    "description": "This service handles Facebook data deletion requests",
                    "endpoints": {
                        "POST /fb-data-deletion": "Facebook data deletion callback",
                        "GET /health": "Health check endpoint",
                        "GET /privacy-policy": "Privacy policy page",
                    },
                }
            ]
        }
    )
