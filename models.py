"""
Document schemas for the site content.

The JSON files keep the admin UI's camelCase keys (projectLink, isLight,
companyName, mapUrl); the models expose snake_case attributes through
aliases. Unknown keys are kept so a document survives a validate/dump cycle.
"""
from pydantic import BaseModel, ConfigDict, Field


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ── Homepage ──────────────────────────────────────────────────────────────────

class Slide(_Document):
    id:           int | str | None = None
    image:        str = ""
    name:         str = ""
    project_link: str | None = Field(default=None, alias="projectLink")
    is_light:     bool = Field(default=False, alias="isLight")  # dark text over a light photo


class HeaderLink(_Document):
    text: str = ""
    url:  str = ""


class Sidebar(_Document):
    company_name: str = Field(default="", alias="companyName")
    email:        str = ""
    address:      str = ""
    map_url:      str = Field(default="", alias="mapUrl")
    links:        list[HeaderLink] = []
    paragraphs:   list[str] = []    # inline [text](url) link syntax


class Homepage(_Document):
    slides:  list[Slide]
    sidebar: Sidebar = Sidebar()


# ── Projects ──────────────────────────────────────────────────────────────────

class ProjectSummary(_Document):
    slug:      str
    thumbnail: str = ""
    title:     str = ""
    subtitle:  str | None = None


class ProjectsIndex(_Document):
    projects: list[ProjectSummary]


class GalleryImage(_Document):
    src: str
    alt: str = ""


class Project(_Document):
    slug:   str
    title:  str = ""
    images: list[GalleryImage] = []
    info:   list[str] = []


def dump(model: BaseModel) -> dict:
    """Serialize a model back to its on-disk (aliased) JSON shape."""
    return model.model_dump(mode="json", by_alias=True)
