"""Project details model definitions."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ProjectDetails(BaseModel):
    team_name: str = Field(default='', alias='teamName')
    working_status: str = Field(default='working', alias='workingStatus')
    problem_statement: str = Field(default='', alias='problemStatement')
    project_info: str = Field(default='', alias='projectInfo')
    budget: str = ''
    updated_at: str = Field(default='', alias='updatedAt')

    class Config:
        populate_by_name = True
        extra = 'allow'


class ProjectDetailsRequest(BaseModel):
    team_name: str = Field(alias='teamName')
    working_status: Literal['working', 'not-working'] = Field(default='working', alias='workingStatus')
    problem_statement: str = Field(alias='problemStatement')
    project_info: str = Field(alias='projectInfo')
    budget: str

    class Config:
        populate_by_name = True

    @field_validator('team_name')
    @classmethod
    def validate_team_name(cls, value: str) -> str:
        if len(value) < 2:
            raise ValueError('Team name must be at least 2 characters')
        return value

    @field_validator('problem_statement')
    @classmethod
    def validate_problem_statement(cls, value: str) -> str:
        if len(value) < 10:
            raise ValueError('Problem statement must be at least 10 characters')
        return value

    @field_validator('project_info')
    @classmethod
    def validate_project_info(cls, value: str) -> str:
        if len(value) < 10:
            raise ValueError('Project information must be at least 10 characters')
        return value

    @field_validator('budget')
    @classmethod
    def validate_budget(cls, value: str) -> str:
        if not value:
            raise ValueError('Budget is required')
        return value
