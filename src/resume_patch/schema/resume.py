"""
Pydantic models describing a resume document.

JSON keys are camelCase (``customSections``, ``fontSize``) while Python
attributes are snake_case; always dump with ``by_alias=True``.

Scalars are strict: a string field never accepts a number and a boolean
field never accepts ``0``/``1``. Numbers accept both ints and floats.
Unknown keys are rejected everywhere so that a patch can never smuggle in a
field that would be silently dropped on the next save.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, Strict
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = "5.0.0"

Text = Annotated[str, Strict()]
RequiredText = Annotated[str, Strict(), Field(min_length=1)]
Flag = Annotated[bool, Strict()]
Number = Annotated[float, Strict()]
Count = Annotated[int, Strict()]

EMAIL_PATTERN = r"^$|^[^\s@]+@[^\s@]+\.[^\s@]+$"
LINK_PATTERN = r"^$|^[A-Za-z][A-Za-z0-9+.\-]*://\S+$"

SectionType = Literal[
    "profiles",
    "experience",
    "education",
    "projects",
    "skills",
    "languages",
    "interests",
    "awards",
    "certifications",
    "publications",
    "volunteer",
    "references",
]
SECTION_KEYS: tuple[str, ...] = SectionType.__args__

Template = Literal[
    "azurill",
    "bronzor",
    "chikorita",
    "ditgar",
    "ditto",
    "gengar",
    "glalie",
    "kakuna",
    "lapras",
    "leafish",
    "onyx",
    "pikachu",
    "rhyhorn",
]
FontWeight = Literal["100", "200", "300", "400", "500", "600", "700", "800", "900"]
LevelType = Literal[
    "hidden", "circle", "square", "rectangle", "rectangle-full", "progress-bar", "icon"
]

ICON_DESCRIPTION = (
    "A Phosphor icon name, or an empty string to hide the icon. "
    "Use '' when unsure which icons are available."
)
HTML_DESCRIPTION = "HTML-formatted string. Leave blank to hide."


class ResumeModel(BaseModel):
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel)


# ----------------------------------------------------------------------
# Shared records
# ----------------------------------------------------------------------
class Url(ResumeModel):
    url: Text = Field("", description="A URL with protocol (http:// or https://). Leave blank to hide.")
    label: Text = Field("", description="Label shown for the URL. Leave blank to show the URL as-is.")


class Picture(ResumeModel):
    hidden: Flag = Field(False, description="Whether to hide the picture.")
    url: Text = Field("", description="URL of the picture. Leave blank to hide.")
    size: Number = Field(80.0, ge=32, le=512, description="Size of the picture in points (pt).")
    rotation: Number = Field(0.0, ge=0, le=360, description="Rotation of the picture in degrees.")
    aspect_ratio: Number = Field(1.0, ge=0.5, le=2.5, description="Width / height of the picture.")
    border_radius: Number = Field(0.0, ge=0, le=100, description="Border radius in points (pt).")
    border_color: Text = Field("rgba(0, 0, 0, 0.5)", description="Border color as rgba(r, g, b, a).")
    border_width: Number = Field(0.0, ge=0, description="Border width in points (pt).")
    shadow_color: Text = Field("rgba(0, 0, 0, 0.5)", description="Shadow color as rgba(r, g, b, a).")
    shadow_width: Number = Field(0.0, ge=0, description="Shadow width in points (pt).")


class CustomField(ResumeModel):
    id: RequiredText = Field(description="Unique identifier of the custom field, usually a UUID.")
    icon: Text = Field("", description=ICON_DESCRIPTION)
    text: Text = Field("", description="Text displayed for the custom field.")
    link: Text = Field("", pattern=LINK_PATTERN, description="URL to link to. Leave blank for plain text.")


class Basics(ResumeModel):
    name: Text = Field("", description="Full name of the author.")
    headline: Text = Field("", description="Headline of the author.")
    email: Text = Field("", pattern=EMAIL_PATTERN, description="Email address. Leave blank to hide.")
    phone: Text = Field("", description="Phone number. Leave blank to hide.")
    location: Text = Field("", description="Location of the author.")
    website: Url = Field(default_factory=Url, description="Website of the author.")
    custom_fields: list[CustomField] = Field(default_factory=list, description="Extra header fields.")


class Summary(ResumeModel):
    title: Text = Field("", description="Title of the summary section.")
    columns: Count = Field(1, ge=1, description="Number of columns the summary spans.")
    hidden: Flag = Field(False, description="Whether to hide the summary.")
    content: Text = Field("", description=f"Summary text. {HTML_DESCRIPTION}")


# ----------------------------------------------------------------------
# Items
# ----------------------------------------------------------------------
class BaseItem(ResumeModel):
    id: RequiredText = Field(description="Unique identifier of the item within its section, usually a UUID.")
    hidden: Flag = Field(False, description="Whether to hide the item.")


class AwardItem(BaseItem):
    title: RequiredText = Field(description="Title of the award.")
    awarder: Text = ""
    date: Text = ""
    website: Url = Field(default_factory=Url)
    description: Text = Field("", description=HTML_DESCRIPTION)


class CertificationItem(BaseItem):
    title: RequiredText = Field(description="Title of the certification.")
    issuer: Text = ""
    date: Text = ""
    website: Url = Field(default_factory=Url)
    description: Text = Field("", description=HTML_DESCRIPTION)


class EducationItem(BaseItem):
    school: RequiredText = Field(description="Name of the school or institution.")
    degree: Text = ""
    area: Text = Field("", description="Area of study.")
    grade: Text = ""
    location: Text = ""
    period: Text = Field("", description="Period of study, free text (e.g. '2014 - 2018').")
    website: Url = Field(default_factory=Url)
    description: Text = Field("", description=HTML_DESCRIPTION)


class ExperienceItem(BaseItem):
    company: RequiredText = Field(description="Name of the company or organization.")
    position: Text = ""
    location: Text = ""
    period: Text = Field("", description="Period of employment, free text (e.g. 'March 2022 - Present').")
    website: Url = Field(default_factory=Url)
    description: Text = Field("", description=HTML_DESCRIPTION)


class InterestItem(BaseItem):
    icon: Text = Field("", description=ICON_DESCRIPTION)
    name: RequiredText = Field(description="Name of the interest.")
    keywords: list[Text] = Field(default_factory=list, description="Tags shown below the name.")


class LanguageItem(BaseItem):
    language: RequiredText = Field(description="Name of the language.")
    fluency: Text = Field("", description="Free text ('Native', 'Fluent') or a CEFR level (A1-C2).")
    level: Count = Field(0, ge=0, le=5, description="Level between 0 and 5; 0 hides the level indicator.")


class ProfileItem(BaseItem):
    icon: Text = Field("", description=ICON_DESCRIPTION)
    network: RequiredText = Field(description="Name of the network or platform.")
    username: Text = ""
    website: Url = Field(default_factory=Url)


class ProjectItem(BaseItem):
    name: RequiredText = Field(description="Name of the project.")
    period: Text = ""
    website: Url = Field(default_factory=Url)
    description: Text = Field("", description=HTML_DESCRIPTION)


class PublicationItem(BaseItem):
    title: RequiredText = Field(description="Title of the publication.")
    publisher: Text = ""
    date: Text = ""
    website: Url = Field(default_factory=Url)
    description: Text = Field("", description=HTML_DESCRIPTION)


class ReferenceItem(BaseItem):
    name: RequiredText = Field(description="Name of the reference, or a note such as 'Available upon request'.")
    description: Text = Field("", description=HTML_DESCRIPTION)


class SkillItem(BaseItem):
    icon: Text = Field("", description=ICON_DESCRIPTION)
    name: RequiredText = Field(description="Name of the skill.")
    proficiency: Text = Field("", description="Free text such as 'Beginner' or 'Advanced'.")
    level: Count = Field(0, ge=0, le=5, description="Level between 0 and 5; 0 hides the level indicator.")
    keywords: list[Text] = Field(default_factory=list, description="Tags shown below the name.")


class VolunteerItem(BaseItem):
    organization: RequiredText = Field(description="Name of the organization.")
    location: Text = ""
    period: Text = ""
    website: Url = Field(default_factory=Url)
    description: Text = Field("", description=HTML_DESCRIPTION)


class CoverLetterItem(BaseItem):
    recipient: Text = Field("", description=f"Recipient block of the letter. {HTML_DESCRIPTION}")
    content: Text = Field("", description=f"Body of the letter. {HTML_DESCRIPTION}")


# ----------------------------------------------------------------------
# Sections
# ----------------------------------------------------------------------
class SectionBase(ResumeModel):
    title: Text = Field("", description="Title of the section.")
    columns: Count = Field(1, ge=1, description="Number of columns the section spans.")
    hidden: Flag = Field(False, description="Whether to hide the section.")


class ItemsSection(SectionBase):
    # Item id uniqueness is checked by validation.cross_field_issues.
    model_config = ConfigDict(json_schema_extra={"x-unique-item-ids": True})


class AwardsSection(ItemsSection):
    items: list[AwardItem]


class CertificationsSection(ItemsSection):
    items: list[CertificationItem]


class EducationSection(ItemsSection):
    items: list[EducationItem]


class ExperienceSection(ItemsSection):
    items: list[ExperienceItem]


class InterestsSection(ItemsSection):
    items: list[InterestItem]


class LanguagesSection(ItemsSection):
    items: list[LanguageItem]


class ProfilesSection(ItemsSection):
    items: list[ProfileItem]


class ProjectsSection(ItemsSection):
    items: list[ProjectItem]


class PublicationsSection(ItemsSection):
    items: list[PublicationItem]


class ReferencesSection(ItemsSection):
    items: list[ReferenceItem]


class SkillsSection(ItemsSection):
    items: list[SkillItem]


class VolunteerSection(ItemsSection):
    items: list[VolunteerItem]


class CoverLetterSection(ItemsSection):
    items: list[CoverLetterItem]


class Sections(ResumeModel):
    profiles: ProfilesSection
    experience: ExperienceSection
    education: EducationSection
    projects: ProjectsSection
    skills: SkillsSection
    languages: LanguagesSection
    interests: InterestsSection
    awards: AwardsSection
    certifications: CertificationsSection
    publications: PublicationsSection
    volunteer: VolunteerSection
    references: ReferencesSection


# Custom sections: the ``type`` tag decides which item model applies.
class CustomProfilesSection(ProfilesSection):
    id: RequiredText
    type: Literal["profiles"]


class CustomExperienceSection(ExperienceSection):
    id: RequiredText
    type: Literal["experience"]


class CustomEducationSection(EducationSection):
    id: RequiredText
    type: Literal["education"]


class CustomProjectsSection(ProjectsSection):
    id: RequiredText
    type: Literal["projects"]


class CustomSkillsSection(SkillsSection):
    id: RequiredText
    type: Literal["skills"]


class CustomLanguagesSection(LanguagesSection):
    id: RequiredText
    type: Literal["languages"]


class CustomInterestsSection(InterestsSection):
    id: RequiredText
    type: Literal["interests"]


class CustomAwardsSection(AwardsSection):
    id: RequiredText
    type: Literal["awards"]


class CustomCertificationsSection(CertificationsSection):
    id: RequiredText
    type: Literal["certifications"]


class CustomPublicationsSection(PublicationsSection):
    id: RequiredText
    type: Literal["publications"]


class CustomVolunteerSection(VolunteerSection):
    id: RequiredText
    type: Literal["volunteer"]


class CustomReferencesSection(ReferencesSection):
    id: RequiredText
    type: Literal["references"]


class CustomCoverLetterSection(CoverLetterSection):
    id: RequiredText
    type: Literal["cover-letter"]


CustomSection = Annotated[
    Union[
        CustomProfilesSection,
        CustomExperienceSection,
        CustomEducationSection,
        CustomProjectsSection,
        CustomSkillsSection,
        CustomLanguagesSection,
        CustomInterestsSection,
        CustomAwardsSection,
        CustomCertificationsSection,
        CustomPublicationsSection,
        CustomVolunteerSection,
        CustomReferencesSection,
        CustomCoverLetterSection,
    ],
    Field(discriminator="type"),
]


# ----------------------------------------------------------------------
# Metadata
# ----------------------------------------------------------------------
DEFAULT_MAIN_COLUMN = ["profiles", "summary", "education", "experience", "projects", "volunteer", "references"]
DEFAULT_SIDEBAR_COLUMN = ["skills", "certifications", "awards", "languages", "interests", "publications"]


class PageLayout(ResumeModel):
    full_width: Flag = Field(False, description="If true the main column spans the page and the sidebar stays empty.")
    main: list[Text] = Field(
        description="Section ids in the main column: built-in section keys, 'summary', or custom section ids.",
    )
    sidebar: list[Text] = Field(
        description="Section ids in the sidebar column: built-in section keys, 'summary', or custom section ids.",
    )


class Layout(ResumeModel):
    sidebar_width: Number = Field(35.0, ge=10, le=50, description="Sidebar width as a percentage of the page.")
    pages: list[PageLayout]


class Css(ResumeModel):
    enabled: Flag = False
    value: Text = Field("", description="Custom CSS applied to the resume.")


class Page(ResumeModel):
    gap_x: Number = Field(4.0, ge=0, description="Horizontal gap between sections in points (pt).")
    gap_y: Number = Field(6.0, ge=0, description="Vertical gap between sections in points (pt).")
    margin_x: Number = Field(14.0, ge=0, description="Horizontal page margin in points (pt).")
    margin_y: Number = Field(12.0, ge=0, description="Vertical page margin in points (pt).")
    format: Literal["a4", "letter"] = "a4"
    locale: Text = Field("en-US", description="Locale used for pre-translated section headings.")
    hide_icons: Flag = False


class LevelDesign(ResumeModel):
    icon: Text = Field("star", description=ICON_DESCRIPTION)
    type: LevelType = Field("circle", description="How skill and language levels are drawn.")


class ColorDesign(ResumeModel):
    primary: Text = "rgba(220, 38, 38, 1)"
    text: Text = "rgba(0, 0, 0, 1)"
    background: Text = "rgba(255, 255, 255, 1)"


class Design(ResumeModel):
    level: LevelDesign
    colors: ColorDesign


class TypographyItem(ResumeModel):
    font_family: Text = Field("IBM Plex Serif", description="A font family available on Google Fonts.")
    font_weights: list[FontWeight] = Field(default_factory=lambda: ["400"])
    font_size: Number = Field(10.0, ge=6, le=24, description="Font size in points (pt).")
    line_height: Number = Field(1.5, ge=0.5, le=4, description="Line height as a multiple of the font size.")


class Typography(ResumeModel):
    body: TypographyItem
    heading: TypographyItem


class Metadata(ResumeModel):
    template: Template = "onyx"
    layout: Layout
    css: Css
    page: Page
    design: Design
    typography: Typography
    notes: Text = Field("", description="Private notes, never rendered. HTML-formatted string.")


# ----------------------------------------------------------------------
# Document root
# ----------------------------------------------------------------------
class ResumeData(ResumeModel):
    # Cross-field rules (unique ids, layout references) live in
    # validation.cross_field_issues so they can be reported at exact pointers.
    model_config = ConfigDict(
        title="ResumeData",
        json_schema_extra={
            "x-unique-custom-section-ids": True,
            "x-layout-references": "metadata.layout.pages[*].main/sidebar name built-in sections, 'summary' or custom section ids",
        },
    )

    version: Text = Field(SCHEMA_VERSION, pattern=r"^\d+\.\d+\.\d+$", description="Document format version.")
    picture: Picture
    basics: Basics
    summary: Summary
    sections: Sections
    custom_sections: list[CustomSection]
    metadata: Metadata


def _empty_section() -> dict[str, Any]:
    return {"title": "", "columns": 1, "hidden": False, "items": []}


def default_resume_tree() -> dict[str, Any]:
    """Return a fresh JSON tree for a blank resume.

    Every container is spelled out so the tree is valid on its own; the
    models keep defaults only for leaf values.
    """
    return {
        "version": SCHEMA_VERSION,
        "picture": {
            "hidden": False,
            "url": "",
            "size": 80,
            "rotation": 0,
            "aspectRatio": 1,
            "borderRadius": 0,
            "borderColor": "rgba(0, 0, 0, 0.5)",
            "borderWidth": 0,
            "shadowColor": "rgba(0, 0, 0, 0.5)",
            "shadowWidth": 0,
        },
        "basics": {
            "name": "",
            "headline": "",
            "email": "",
            "phone": "",
            "location": "",
            "website": {"url": "", "label": ""},
            "customFields": [],
        },
        "summary": {"title": "", "columns": 1, "hidden": False, "content": ""},
        "sections": {key: _empty_section() for key in SECTION_KEYS},
        "customSections": [],
        "metadata": {
            "template": "onyx",
            "layout": {
                "sidebarWidth": 35,
                "pages": [
                    {
                        "fullWidth": False,
                        "main": list(DEFAULT_MAIN_COLUMN),
                        "sidebar": list(DEFAULT_SIDEBAR_COLUMN),
                    }
                ],
            },
            "css": {"enabled": False, "value": ""},
            "page": {
                "gapX": 4,
                "gapY": 6,
                "marginX": 14,
                "marginY": 12,
                "format": "a4",
                "locale": "en-US",
                "hideIcons": False,
            },
            "design": {
                "level": {"icon": "star", "type": "circle"},
                "colors": {
                    "primary": "rgba(220, 38, 38, 1)",
                    "text": "rgba(0, 0, 0, 1)",
                    "background": "rgba(255, 255, 255, 1)",
                },
            },
            "typography": {
                "body": {
                    "fontFamily": "IBM Plex Serif",
                    "fontWeights": ["400", "500"],
                    "fontSize": 10,
                    "lineHeight": 1.5,
                },
                "heading": {
                    "fontFamily": "IBM Plex Serif",
                    "fontWeights": ["600"],
                    "fontSize": 14,
                    "lineHeight": 1.5,
                },
            },
            "notes": "",
        },
    }


def default_resume() -> ResumeData:
    return ResumeData.model_validate(default_resume_tree())
