from typing import Dict, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.border_field import GridConfig, KERNELS
from .core.palette import DEFAULT_COLOR, GROUP_COLORS, Palette


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Raster Configuration
    width: int = Field(default=1000, gt=0, description="Raster columns")
    height: int = Field(default=800, gt=0, description="Raster rows")
    smoothing_radius: float = Field(
        default=2.0, ge=0.0, description="Distance band for contending seeds"
    )

    # Border Pass Configuration
    workers: Optional[int] = Field(
        default=None, gt=0, description="Row worker threads (None = executor default)"
    )
    kernel: str = Field(default="vectorized", description="Row kernel: vectorized, reference")
    clear_before_pass: bool = Field(
        default=True, description="Clear the border mask before each border pass"
    )

    # Scenario Configuration
    seed_count: int = Field(default=750, ge=0, description="Seeds in a generated scenario")

    # Colour Configuration
    group_colors: Dict[int, Tuple[int, int, int, int]] = Field(
        default_factory=lambda: dict(GROUP_COLORS),
        description="Group to RGBA colour table",
    )
    default_color: Tuple[int, int, int, int] = Field(
        default=DEFAULT_COLOR, description="Colour for groups missing from the table"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Logging format (console, json)")

    @field_validator("kernel")
    @classmethod
    def _known_kernel(cls, value: str) -> str:
        if value not in KERNELS:
            raise ValueError(f"kernel must be one of {sorted(KERNELS)}, got {value!r}")
        return value

    def grid_config(self) -> GridConfig:
        """Raster dimensions and smoothing radius for the border pass."""
        return GridConfig(
            width=self.width,
            height=self.height,
            smoothing_radius=self.smoothing_radius,
        )

    def palette(self) -> Palette:
        """Build the group colour table."""
        return Palette(self.group_colors, default=self.default_color)

    model_config = SettingsConfigDict(
        env_prefix="BORDERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instantiate singleton settings object
settings = Settings()
