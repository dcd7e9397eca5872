"""Application entry-point synthesis.

Builds the bootstrap file (``src/app.js`` / ``src/app.ts``) that imports every
selected library module and calls its ``apply*`` function on the application
instance.  Libraries are imported and applied in exactly the order they were
selected: some ``apply`` functions depend on work done by an earlier one.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from boilercreate.catalog import Framework, module_stem

from .templates import TemplateRenderer

_ENTRY_TEMPLATES: dict[Framework, str] = {
    Framework.EXPRESS: "src/app.j2",
}


def library_import(identifier: str) -> dict[str, str]:
    """Template context for one library: id and module file stem.

    The template derives the ``apply*`` name with the ``symbol`` filter.
    """
    return {
        "id": identifier,
        "file": module_stem(identifier),
    }


def synthesize_entry_point(
    framework: Framework | str,
    libraries: Iterable[str],
    *,
    port: int = 3000,
    renderer: Optional[TemplateRenderer] = None,
) -> str:
    """Return the source text of the application bootstrap file.

    Args:
        framework: The selected framework.
        libraries: Selected library identifiers, in initialization order.
        port: Fallback port used when ``PORT`` is not set at runtime.
        renderer: Renderer to use; a default one is created when omitted.

    Returns:
        The rendered entry point.  The same text is used for JavaScript and
        TypeScript projects since both emit ES modules.
    """
    framework = Framework.parse(framework)
    renderer = renderer or TemplateRenderer()
    context: dict[str, Any] = {
        "framework_label": framework.label,
        "port": port,
        "libraries": [library_import(lib) for lib in libraries],
    }
    return renderer.render(_ENTRY_TEMPLATES[framework], context)
