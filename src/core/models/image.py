"""Cloudflare Images API response models."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class CloudflareApiMessage(BaseModel):
    """Error or informational message in the API envelope."""

    model_config = ConfigDict(extra="ignore")

    code: int | None = Field(None, description="Cloudflare error code")
    message: StrictStr = Field("", description="Human-readable message")

    def __str__(self) -> str:
        if self.code is None:
            return self.message
        return f"{self.code}: {self.message}"


class CloudflareImage(BaseModel):
    """Image details returned by the Images API."""

    model_config = ConfigDict(extra="ignore")

    id: StrictStr = Field(..., description="Image identifier assigned by the store")
    filename: StrictStr | None = Field(None, description="Original upload filename")
    uploaded: StrictStr | None = Field(None, description="ISO-8601 upload timestamp")
    variants: list[StrictStr] = Field(
        default_factory=list, description="Delivery URLs per variant"
    )


class CloudflareImageResponse(BaseModel):
    """Standard Cloudflare v4 API response envelope."""

    model_config = ConfigDict(extra="ignore")

    success: StrictBool = Field(..., description="Domain-level success flag")
    errors: list[CloudflareApiMessage] = Field(default_factory=list)
    messages: list[CloudflareApiMessage] = Field(default_factory=list)
    result: CloudflareImage | None = None

    def error_summary(self) -> str:
        """Join the reported errors into one line."""
        return " ".join(str(error) for error in self.errors)
