"""Server configuration loaded from environment variables."""
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_CATALOG = DATA_DIR / "catalog.yaml"


class Settings(BaseSettings):
    """Server configuration loaded from environment variables.

    Attributes:
        catalog: Path to the topic catalog YAML file.
        storage_root: Directory the topic documents are read from. Defaults
            to the directory containing the catalog file.
        transport: MCP transport to serve on.
        host: Bind address for the HTTP transport.
        port: Port number for the HTTP transport.
        log_level: Minimum level for structured log output.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRACTICES_MCP_",
        case_sensitive=False,
        extra="ignore",
    )

    catalog: Path = DEFAULT_CATALOG
    storage_root: Optional[Path] = None
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    def resolved_storage_root(self) -> Path:
        """Absolute storage root, falling back to the catalog's directory."""
        root = self.storage_root if self.storage_root is not None else self.catalog.parent
        return root.absolute()
