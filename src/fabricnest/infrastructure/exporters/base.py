"""Exporter framework for nesting layouts.

An exporter turns a successful LayoutOutput into the text of one file
format. Concrete exporters subclass LayoutExporter, implement ``render`` and
register under a format name; ExportManager writes one layout to several
formats at once.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fabricnest.application.dtos import LayoutOutput


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """What the registry and the CLI expect from an exporter."""

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    def export(self, output: LayoutOutput, path: Path) -> None: ...

    def export_string(self, output: LayoutOutput) -> str: ...


class LayoutExporter(ABC):
    """Base class for exporters of a single successful layout.

    ``render`` is only called for outputs that hold a layout and its
    metrics; failed runs are rejected with a ValueError naming the format.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def render(self, output: LayoutOutput) -> str:
        """Render the layout of a successful run."""

    def export_string(self, output: LayoutOutput) -> str:
        if not output.is_valid or output.layout is None or output.metrics is None:
            reason = "; ".join(output.errors) or "no layout"
            raise ValueError(f"Cannot export '{self.format_name}': {reason}")
        return self.render(output)

    def export(self, output: LayoutOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.debug("Wrote %s export to %s", self.format_name, path)


class ExporterRegistry:
    """Format name to exporter class lookup.

    Example:
        @ExporterRegistry.register("svg")
        class SvgExporter(LayoutExporter):
            format_name = "svg"
            file_extension = "svg"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str):
        """Class decorator registering an exporter under ``format_name``.

        Raises:
            ValueError: If another class already uses the format name.
        """

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            existing = cls._exporters.get(format_name)
            if existing is not None and existing is not exporter_class:
                raise ValueError(
                    f"Format '{format_name}' is already handled by {existing.__name__}"
                )
            cls._exporters[format_name] = exporter_class
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Exporter class for a format name.

        Raises:
            KeyError: If no exporter is registered for the format.
        """
        try:
            return cls._exporters[format_name]
        except KeyError:
            raise KeyError(
                f"No exporter registered for format '{format_name}'; "
                f"choose from {', '.join(cls.available_formats()) or 'nothing'}"
            ) from None

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters)

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Writes one layout to several formats.

    Every format is rendered before anything is written, so an unknown
    format or a failed run leaves the output directory untouched.

    Attributes:
        output_dir: Directory receiving ``{project_name}_{format}.{ext}`` files.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: list[str],
        output: LayoutOutput,
        project_name: str = "layout",
    ) -> dict[str, Path]:
        """Export the layout to every format in ``formats``.

        Returns:
            Format names mapped to the written files, in request order.

        Raises:
            KeyError: If any format is not registered.
            ValueError: If the output holds no layout.
            OSError: If a file cannot be written.
        """
        exporters = [ExporterRegistry.get(name)() for name in formats]
        rendered = [
            (name, exporter.file_extension, exporter.export_string(output))
            for name, exporter in zip(formats, exporters)
        ]

        self.output_dir.mkdir(parents=True, exist_ok=True)
        files: dict[str, Path] = {}
        for name, extension, text in rendered:
            path = self.output_dir / f"{project_name}_{name}.{extension}"
            path.write_text(text, encoding="utf-8")
            logger.info("Exported %s layout to %s", name, path)
            files[name] = path
        return files
