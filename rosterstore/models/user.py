"""User model definitions."""

import re

from pydantic import BaseModel, Field, field_validator, model_validator

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

LOGIN_KEY_ATTRIBUTES = {
    'userId': 'user_id',
    'email': 'email',
}


class User(BaseModel):
    """Represents a registered team leader.

    ``password`` is kept in plain text. This is an insecure default carried
    over from existing stored data and must be replaced by a proper hashing
    scheme before any production use.
    """

    id: str = ''
    name: str = ''
    user_id: str = Field(default='', alias='userId')
    password: str = ''
    phone: str = ''
    email: str = ''
    organization: str = ''
    role: str = ''
    is_team_leader: bool = Field(default=False, alias='isTeamLeader')

    class Config:
        populate_by_name = True
        extra = 'allow'

    def to_public(self) -> 'PublicUser':
        return PublicUser.model_validate(self.model_dump(by_alias=True, exclude={'password'}))


class PublicUser(BaseModel):
    """A user as seen by the session: never carries the password."""

    id: str = ''
    name: str = ''
    user_id: str = Field(default='', alias='userId')
    phone: str = ''
    email: str = ''
    organization: str = ''
    role: str = ''
    is_team_leader: bool = Field(default=False, alias='isTeamLeader')

    class Config:
        populate_by_name = True
        extra = 'allow'

    @model_validator(mode='before')
    @classmethod
    def drop_password(cls, data):
        if isinstance(data, dict) and 'password' in data:
            data = {key: value for key, value in data.items() if key != 'password'}
        return data


class UserPatch(BaseModel):
    name: str | None = None
    user_id: str | None = Field(default=None, alias='userId')
    password: str | None = None
    phone: str | None = None
    email: str | None = None
    organization: str | None = None
    role: str | None = None
    is_team_leader: bool | None = Field(default=None, alias='isTeamLeader')

    class Config:
        populate_by_name = True


def login_key_of(user: User | PublicUser, login_key_field: str) -> str:
    return getattr(user, LOGIN_KEY_ATTRIBUTES[login_key_field])


def normalize_email(value: str) -> str:
    normalized = value.strip()
    if not EMAIL_PATTERN.match(normalized):
        raise ValueError('Invalid email address')
    return normalized


class ContactFields(BaseModel):
    """Fields shared by leader registration and teammate entry."""

    name: str
    user_id: str = Field(alias='userId')
    phone: str
    email: str
    organization: str
    role: str

    class Config:
        populate_by_name = True

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required')
        return normalized

    @field_validator('user_id')
    @classmethod
    def validate_user_id(cls, value: str) -> str:
        normalized = value.strip()
        if len(normalized) < 3:
            raise ValueError('User ID must be at least 3 characters')
        return normalized

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, value: str) -> str:
        normalized = value.strip()
        if len(normalized) < 10:
            raise ValueError('Phone number must be at least 10 digits')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator('organization')
    @classmethod
    def validate_organization(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Organization is required')
        return normalized

    @field_validator('role')
    @classmethod
    def validate_role(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Role is required')
        return normalized


class RegisterRequest(ContactFields):
    password: str

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < 6:
            raise ValueError('Password must be at least 6 characters')
        return value
