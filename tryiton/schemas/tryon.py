from pydantic import BaseModel


class TryOnResponse(BaseModel):
    success: bool = True
    resultImageUrl: str
    processingTime: str
    message: str


class TryOnFailure(BaseModel):
    success: bool = False
    error: str
