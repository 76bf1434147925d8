from pydantic import BaseModel, Field
from typing import List, Optional

class AppSettings(BaseModel):
    """Application-wide settings."""
    # General settings
    debug_logging: bool = False

    # Finder priority used when the caller does not name any
    default_finders: List[str] = Field(default_factory=lambda: ["chrome", "edge", "firefox"])

    # Windows host install roots as seen from inside WSL
    wsl_program_files: str = "/mnt/c/Program Files"
    wsl_program_files_x86: str = "/mnt/c/Program Files (x86)"

    # Seconds to wait for cmd.exe / wslpath / wslinfo. None waits forever.
    wsl_helper_timeout: Optional[float] = None

# Global instance of settings
settings = AppSettings()
