from pydantic import field_validator
from pydantic_settings import BaseSettings

from tocgen.toc.scanner import validate_marker


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    heading_marker: str = "#"
    reindex_batch_size: int = 100

    model_config = {"env_prefix": "TOCGEN_"}

    @field_validator("heading_marker")
    @classmethod
    def check_heading_marker(cls, value: str) -> str:
        return validate_marker(value)
