"""Team and roster model definitions."""

from pydantic import BaseModel, Field

STUDENT_FIELDS = ('full_name', 'class_name', 'place', 'school')


class Student(BaseModel):
    """A team member. Exists only inside the roster of one team."""

    id: str = ''
    full_name: str = Field(default='', alias='fullName')
    class_name: str = Field(default='', alias='class')
    place: str = ''
    school: str = ''

    class Config:
        populate_by_name = True
        extra = 'allow'

    def is_complete(self) -> bool:
        return all(getattr(self, field_name).strip() for field_name in STUDENT_FIELDS)

    def trimmed(self) -> 'Student':
        return self.model_copy(
            update={field_name: getattr(self, field_name).strip() for field_name in STUDENT_FIELDS}
        )


class Team(BaseModel):
    """Represents a team and its ordered roster."""

    id: str = ''
    team_name: str = Field(default='', alias='teamName')
    members: list[Student] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = 'allow'


class TeamPatch(BaseModel):
    team_name: str | None = Field(default=None, alias='teamName')
    members: list[Student] | None = None

    class Config:
        populate_by_name = True
