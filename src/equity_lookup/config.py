from typing import Literal

from pydantic import BaseModel, Field


class Settings(BaseModel):
    input: str = Field("-", min_length=1)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    report_rejects: bool = True
    timeout: float = Field(20, gt=0)
    max_attempts: int = Field(5, ge=1)
    backoff_base: float = Field(1.0, gt=0)
    backoff_jitter: float = Field(0.5, ge=0)
