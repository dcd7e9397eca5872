"""The user's selection: what to generate.

A ``Selection`` is built once from CLI flags or interactive answers and never
mutated afterwards.  Component identifiers keep the order the user gave them
in (duplicates collapse onto their first occurrence) because library
initialization order is significant in the generated entry point.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from boilercreate.catalog import Category, Framework
from boilercreate.errors import InvalidProjectName, ProjectAlreadyExists

PROJECT_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

_FIELD_CATEGORIES: dict[str, Category] = {
    "libraries": Category.LIBRARY,
    "middleware": Category.MIDDLEWARE,
    "services": Category.SERVICE,
}


class Selection(BaseModel):
    """Validated set of user choices driving generation."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(default="my-backend-project")
    framework: Framework = Field(default=Framework.EXPRESS)
    libraries: tuple[str, ...] = Field(default=())
    middleware: tuple[str, ...] = Field(default=())
    services: tuple[str, ...] = Field(default=())
    use_typescript: bool = Field(default=False)
    use_docker: bool = Field(default=False)
    use_cicd: bool = Field(default=False)
    use_eslint: bool = Field(default=True)
    use_prettier: bool = Field(default=True)
    use_git: bool = Field(default=True)
    package_manager: str = Field(default="npm")

    @field_validator("framework", mode="before")
    @classmethod
    def _parse_framework(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("libraries", "middleware", "services", mode="before")
    @classmethod
    def _collapse_duplicates(cls, value: Any, info: ValidationInfo) -> Any:
        # Known identifiers are stored in their hyphenated catalogue form so
        # ``cookieParser`` and ``cookie-parser`` collapse onto one entry.
        # Unknown ones are kept verbatim and rejected during file planning.
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        category = _FIELD_CATEGORIES[info.field_name]
        seen: dict[str, None] = {}
        for item in value:
            key = str(getattr(item, "value", item)).strip()
            if not key:
                continue
            member = category.resolve(key)
            seen.setdefault(member.value if member is not None else key, None)
        return tuple(seen)

    @field_validator("package_manager", mode="before")
    @classmethod
    def _strip_package_manager(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return getattr(value, "value", value)

    # -- Derived views -----------------------------------------------------

    @property
    def extension(self) -> str:
        """Source file extension for generated code."""
        return "ts" if self.use_typescript else "js"

    def identifiers(self, category: Category) -> tuple[str, ...]:
        """The selected identifiers for *category*, in selection order."""
        if category is Category.LIBRARY:
            return self.libraries
        if category is Category.MIDDLEWARE:
            return self.middleware
        return self.services

    def components(self) -> Iterator[tuple[Category, str]]:
        """Yield ``(category, identifier)`` for every selected component.

        Libraries come first, then middleware, then services; within a
        category the selection order is kept.
        """
        for category in Category:
            for identifier in self.identifiers(category):
                yield category, identifier


def validate_project_name(name: str, output_dir: str | Path = ".") -> Path:
    """Check *name* and return the project root it would be generated into.

    Raises:
        InvalidProjectName: If *name* is not made of ``[A-Za-z0-9_-]``.
        ProjectAlreadyExists: If ``output_dir / name`` already exists.
    """
    if not PROJECT_NAME_PATTERN.fullmatch(name or ""):
        raise InvalidProjectName(name)
    root = Path(output_dir) / name
    if root.exists():
        raise ProjectAlreadyExists(root)
    return root
