from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str
    users_count: int
    agents_count: int
    ownerships_count: int
