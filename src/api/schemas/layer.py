"""
Layer schemas - Pydantic models for text layer requests/responses
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.enums import LayerPosition
from utils.colors import is_css_color


class LayerParamsSchema(BaseModel):
    """Styling parameters; omitted fields keep their current value"""
    speed: Optional[float] = Field(None, ge=0, le=10, description="Motion speed multiplier (clamped to 0.1-10)")
    color: Optional[str] = Field(None, description="CSS colour (e.g. '#ff00ff')")
    font_size: Optional[str] = Field(None, alias="fontSize", description="CSS size (e.g. '48px')")
    position: Optional[LayerPosition] = Field(None, description="top | center | bottom")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_css_color(v):
            raise ValueError(f"Not a CSS colour: {v}")
        return v

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, by_alias=False)


class LayerResponse(BaseModel):
    id: int
    content: str
    animation: Optional[str] = Field(None, description="Animation kind wire name (e.g. 'randomMove')")
    params: Dict[str, Any]
    visible: bool
    running: bool
    clock: float
    ticks: int


class LayerListResponse(BaseModel):
    layers: List[LayerResponse]
    count: int


class LayerUpdateRequest(BaseModel):
    """Set content (empty hides the layer) and optionally animation/params"""
    content: str = Field(description="Text to display; empty string hides the layer")
    animation: Optional[str] = Field(None, description="Animation kind (e.g. 'scroll', 'randomMove')")
    params: Optional[LayerParamsSchema] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "content": "HELLO TOKYO",
            "animation": "wave",
            "params": {"speed": 1.5, "color": "#00ffff", "fontSize": "64px", "position": "center"}
        }
    })


class LayerAnimationRequest(BaseModel):
    animation: str = Field(description="Animation kind (e.g. 'spiral')")
    params: Optional[LayerParamsSchema] = None


class LayerToggleResponse(BaseModel):
    id: int
    visible: bool


class SpeedScaleRequest(BaseModel):
    multiplier: float = Field(gt=0, description="Factor applied to every layer's speed")


class SpeedScaleResponse(BaseModel):
    speeds: List[float]


class LayerResetResponse(BaseModel):
    restarted: int
