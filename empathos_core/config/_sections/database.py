"""Database configuration models."""

from pathlib import Path

from pydantic import BaseModel

MEMORY_FILENAME = ":memory:"


class DatabaseSettings(BaseModel):
    url: str = ""
    data_dir: str = "."
    filename: str = "empathos.db"
    echo: bool = False

    def location(self) -> str:
        """Storage location handed to the state log."""
        if self.url:
            return self.url
        if self.filename == MEMORY_FILENAME:
            return MEMORY_FILENAME
        return str(Path(self.data_dir).expanduser() / self.filename)
