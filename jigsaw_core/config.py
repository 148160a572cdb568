"""Configuration for puzzle generation and interaction."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings, overridable through JIGSAW_* environment variables."""

    # Generation settings
    DEFAULT_PIECE_COUNT: int = 40
    WAVES_PER_CUT: int = 3
    EDGE_SAMPLES: int = 20  # Samples per jointed edge

    # Board settings
    SCATTER_FACTOR: float = 2.0  # Scatter area relative to the image size
    SNAP_THRESHOLD_RATIO: float = 1 / 3  # Default snap threshold relative to piece width

    # Viewport settings
    MIN_ZOOM: float = 0.1
    MAX_ZOOM: float = 10.0
    DEFAULT_HOST_WIDTH: int = 1344
    DEFAULT_HOST_HEIGHT: int = 960

    class Config:
        """Pydantic configuration class."""

        case_sensitive = True
        env_file = ".env"
        env_prefix = "JIGSAW_"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Create instance
settings = get_settings()
