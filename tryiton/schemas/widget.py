from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import settings
from ..services.widget_styles import BUTTON_STYLES


WIDGET_STYLES = tuple(BUTTON_STYLES)

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class WidgetSettings(BaseModel):
    buttonText: str = Field("Try It On Virtually", min_length=1, max_length=60)
    widgetStyle: str = "elegant-minimal"
    showDescription: bool = True
    customDescription: str = Field("See how this looks on you with AI", max_length=200)
    primaryColor: str = Field("#6366f1", pattern=HEX_COLOR)
    backgroundColor: str = Field("#ffffff", pattern=HEX_COLOR)
    textColor: str = Field("#1f2937", pattern=HEX_COLOR)
    borderRadius: int = Field(12, ge=0, le=50)
    widgetEnabled: bool = True
    buttonWidth: Literal["auto", "full", "medium", "large"] = "auto"
    buttonAlignment: Literal["left", "center", "right"] = "center"
    useCustomColors: bool = False

    @field_validator("widgetStyle")
    @classmethod
    def _known_style(cls, v: str) -> str:
        if v not in WIDGET_STYLES:
            raise ValueError(f"widgetStyle must be one of: {', '.join(WIDGET_STYLES)}")
        return v


class ProductVariant(BaseModel):
    id: str
    title: str
    price: float = Field(ge=0)
    image: str


class Product(BaseModel):
    id: str
    title: str
    price: float = Field(ge=0)
    image: str
    variants: List[ProductVariant] = Field(default_factory=list)
    type: Optional[str] = None
    enabled: bool = True


class ProductUpdate(BaseModel):
    title: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = None
    variants: Optional[List[ProductVariant]] = None
    type: Optional[str] = None
    enabled: Optional[bool] = None


class CachedResult(BaseModel):
    # Unknown keys are dropped so the stored entry stays bounded
    model_config = ConfigDict(extra="ignore")

    resultImageUrl: str
    productId: Optional[str] = Field(None, max_length=64)
    productTitle: Optional[str] = Field(None, max_length=200)
    variant: Optional[str] = Field(None, max_length=200)
    processingTime: Optional[str] = Field(None, max_length=16)
    timestamp: Optional[int] = None

    @field_validator("resultImageUrl")
    @classmethod
    def _bounded(cls, v: str) -> str:
        if len(v) > settings.result_max_url_chars:
            raise ValueError(f"resultImageUrl exceeds {settings.result_max_url_chars} characters")
        return v


class TopProduct(BaseModel):
    id: str
    name: str
    tryOns: int
    successRate: int


class ChartPoint(BaseModel):
    month: str
    successful: int
    failed: int


class Activity(BaseModel):
    id: str
    action: str
    product: str
    timestamp: datetime
    timeAgo: str
    success: bool


class AnalyticsData(BaseModel):
    totalTryOns: int
    successfulTryOns: int
    successRate: float
    uniqueUsers: int
    topProducts: List[TopProduct]
    chartData: List[ChartPoint]
    recentActivity: List[Activity]


class ButtonStyle(BaseModel):
    style: str
    classes: str

