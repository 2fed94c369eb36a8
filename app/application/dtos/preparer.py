"""Preparer DTOs."""

from app.application.dtos.base import DTO


class Preparer(DTO):
    """Tax preparer assigned to follow up with leads."""

    code: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    title: str = ""
    avatar_url: str = ""

    @property
    def full_name(self) -> str:
        """First and last name joined, or the code when both are empty."""
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.code

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "code": "ow",
                "first_name": "Owliver",
                "last_name": "Owl",
                "email": "owliver@example.com",
                "phone": "1 (404) 627-1015",
                "title": "Professional Tax Services",
                "avatar_url": "/images/default-avatar.png",
            }
        }


# Used when the directory is empty or unreadable
LAST_RESORT_PREPARER = Preparer(
    code="ow",
    first_name="Tax",
    last_name="Genius",
    email="taxgenius.tax@gmail.com",
    phone="1 (404) 627-1015",
    title="Professional Tax Services",
    avatar_url="/images/default-avatar.png",
)
