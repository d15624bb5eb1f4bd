"""Document metadata model definitions."""

from pydantic import BaseModel, Field, field_validator


class Document(BaseModel):
    """Metadata of an uploaded document. No file content is stored."""

    id: str = ''
    name: str = ''
    size: int = 0
    type: str = ''
    upload_date: str = Field(default='', alias='uploadDate')

    class Config:
        populate_by_name = True
        extra = 'allow'


class DocumentUpload(BaseModel):
    name: str
    size: int = 0
    type: str = ''

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('File name is required')
        return normalized

    @field_validator('size')
    @classmethod
    def validate_size(cls, value: int) -> int:
        if value < 0:
            raise ValueError('File size cannot be negative')
        return value


class DocumentPatch(BaseModel):
    name: str | None = None
    size: int | None = None
    type: str | None = None
