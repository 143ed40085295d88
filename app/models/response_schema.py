from pydantic import BaseModel

class IssueResponse(BaseModel):
    domain: str
    secret: str

class AttachResponse(BaseModel):
    subdomain: str

class ErrorResponse(BaseModel):
    error: str
