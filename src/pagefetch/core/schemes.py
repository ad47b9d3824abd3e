"""Scheme dispatch: one fetch strategy per supported URL scheme."""

from enum import Enum
from pathlib import Path
from typing import Protocol

from ..errors import InvalidDataURL, LocalFileError, UnsupportedScheme
from .protocols import Response
from .url import TargetURL


class Scheme(str, Enum):
    HTTP = "http"
    HTTPS = "https"
    FILE = "file"
    DATA = "data"

    @classmethod
    def of(cls, target: TargetURL) -> "Scheme":
        try:
            return cls(target.scheme)
        except ValueError:
            raise UnsupportedScheme(target.scheme) from None


class SchemeHandler(Protocol):
    async def fetch(self, target: TargetURL) -> Response:
        ...


class FileHandler:
    """Describes local paths: a listing for directories, a summary for files."""

    async def fetch(self, target: TargetURL) -> Response:
        path = Path(target.path)
        try:
            if path.is_dir():
                content = self.list_directory(path)
            else:
                stat = path.stat()
                content = f"Name: {path.name}\tSize: {stat.st_size} Bytes\n"
        except OSError as exc:
            raise LocalFileError(f"unable to read {target.path}: {exc}") from exc
        return Response(body=content.encode("utf-8"), url=target.url)

    @staticmethod
    def list_directory(path: Path) -> str:
        names = []
        for entry in sorted(path.iterdir(), key=lambda p: p.name):
            names.append(f"{entry.name}/" if entry.is_dir() else entry.name)
        return "\n".join(names)


class DataHandler:
    """Returns the inline content of a data URL without any network activity."""

    async def fetch(self, target: TargetURL) -> Response:
        _, sep, content = target.path.partition(",")
        if not sep:
            raise InvalidDataURL(f"{target.raw!r} has no ',' before its content")
        return Response(body=content.encode("utf-8"), url=target.url)
