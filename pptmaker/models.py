from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, model_serializer

MIN_SLIDES = 5
MAX_SLIDES = 20
DEFAULT_NUM_SLIDES = 8


class SlideType(str, Enum):
    """Slide types the user may restrict generation to."""
    CONTENT = "content"
    SECTION = "section"
    QUOTE = "quote"
    TWO_COLUMN = "two-column"

    @property
    def display_name(self) -> str:
        return {
            SlideType.CONTENT: "Content (bullet points)",
            SlideType.SECTION: "Section headers",
            SlideType.QUOTE: "Quotes",
            SlideType.TWO_COLUMN: "Two-column comparisons",
        }[self]


class SlideTypeMode(str, Enum):
    DYNAMIC = "dynamic"
    CUSTOM = "custom"


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    ACADEMIC = "academic"
    PERSUASIVE = "persuasive"
    INSPIRATIONAL = "inspirational"


DEFAULT_TONE = Tone.PROFESSIONAL


class ToneMode(str, Enum):
    AUTO = "auto"
    PRESET = "preset"
    CUSTOM = "custom"


# =========================
# Slides
# =========================
class _SlideBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    slide_number: int
    title: str

    @model_serializer(mode="wrap")
    def drop_unused_fields(self, handler):
        # Declared optionals left as None are omitted; extra fields are kept verbatim, nulls included.
        data = handler(self)
        declared = type(self).model_fields
        return {k: v for k, v in data.items() if v is not None or k not in declared}


class TitleSlide(_SlideBase):
    type: Literal["title"] = "title"
    subtitle: Optional[str] = None


class ContentSlide(_SlideBase):
    type: Literal["content"] = "content"
    bullet_points: Optional[List[str]] = None


class SectionSlide(_SlideBase):
    type: Literal["section"] = "section"


class QuoteSlide(_SlideBase):
    type: Literal["quote"] = "quote"
    quote_text: Optional[str] = None
    quote_author: Optional[str] = None


class TwoColumnSlide(_SlideBase):
    type: Literal["two-column"] = "two-column"
    column_left_title: Optional[str] = None
    column_left_points: Optional[List[str]] = None
    column_right_title: Optional[str] = None
    column_right_points: Optional[List[str]] = None


class UnknownSlide(_SlideBase):
    """A slide type this client does not know yet; every field is kept verbatim."""
    model_config = ConfigDict(extra="allow")

    type: str


KNOWN_SLIDE_TYPES = ("title", "content", "section", "quote", "two-column")


def _slide_kind(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    return kind if kind in KNOWN_SLIDE_TYPES else "unknown"


Slide = Annotated[
    Union[
        Annotated[TitleSlide, Tag("title")],
        Annotated[ContentSlide, Tag("content")],
        Annotated[SectionSlide, Tag("section")],
        Annotated[QuoteSlide, Tag("quote")],
        Annotated[TwoColumnSlide, Tag("two-column")],
        Annotated[UnknownSlide, Tag("unknown")],
    ],
    Discriminator(_slide_kind),
]


def renumbered(slides: List[Slide]) -> List[Slide]:
    """Copy of `slides` numbered 1..N in list order; all other fields untouched."""
    return [s.model_copy(update={"slide_number": i}) for i, s in enumerate(slides, start=1)]


class Outline(BaseModel):
    presentation_title: str
    slides: List[Slide] = Field(default_factory=list)
    template: Optional[str] = None


# =========================
# Wire envelopes
# =========================
class OutlineRequest(BaseModel):
    topic: str
    num_slides: int
    tone: Optional[str] = None
    allowed_slide_types: Optional[List[str]] = None


class OutlineMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    topic: Optional[str] = None
    requested_slides: Optional[int] = None
    generated_slides: Optional[int] = None


class OutlineResponse(BaseModel):
    status: str
    outline: Outline
    metadata: Optional[OutlineMetadata] = None


class PresentationRequest(BaseModel):
    presentation_title: str
    slides: List[Slide]
    template: str


# =========================
# Paywall settings
# =========================
class PaywallSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Feature limits
    presentation_limit: int = Field(alias="presentationLimit")
    outline_limit: int = Field(alias="outlineLimit")

    # Paywall behaviour
    hard_paywall: bool = Field(alias="hardPaywall")
    custom_paywall: bool = Field(alias="customPaywall")
    custom_paywall_version: int = Field(alias="customPaywallVersion")
    paywall_close_button_delay: int = Field(alias="paywallCloseButtonDelay")
    paywall_close_button_delay_on_limit: int = Field(alias="paywallCloseButtonDelayOnLimit")
    show_paywall_on_start: bool = Field(alias="showPaywallOnStart")

    # Custom paywall v2 plan visibility
    custom_paywall_v2_monthly: bool = Field(alias="custompaywallv2Monthly")
    custom_paywall_v2_weekly: bool = Field(alias="custompaywallv2Weekly")


class PaywallSettingsResponse(BaseModel):
    status: str
    settings: PaywallSettings


DEFAULT_PAYWALL_SETTINGS = PaywallSettings(
    presentation_limit=2,
    outline_limit=3,
    hard_paywall=False,
    custom_paywall=True,
    custom_paywall_version=1,
    paywall_close_button_delay=30,
    paywall_close_button_delay_on_limit=35,
    show_paywall_on_start=False,
    custom_paywall_v2_monthly=True,
    custom_paywall_v2_weekly=True,
)
