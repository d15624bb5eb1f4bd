"""Teammate model definitions."""

from pydantic import BaseModel, Field

from rosterstore.models.user import ContactFields


class Teammate(BaseModel):
    """A member of the leader's organization roster."""

    id: str = ''
    name: str = ''
    user_id: str = Field(default='', alias='userId')
    phone: str = ''
    email: str = ''
    organization: str = ''
    role: str = ''
    added_date: str = Field(default='', alias='addedDate')

    class Config:
        populate_by_name = True
        extra = 'allow'


class TeammateRequest(ContactFields):
    pass


class TeammatePatch(BaseModel):
    name: str | None = None
    user_id: str | None = Field(default=None, alias='userId')
    phone: str | None = None
    email: str | None = None
    organization: str | None = None
    role: str | None = None

    class Config:
        populate_by_name = True
