"""Session tools: describe the user's platform and installed packages."""

from __future__ import annotations

import locale
import os
import platform
import sys
from datetime import datetime
from importlib import metadata

from pydantic import BaseModel, Field

from btw.infra.markdown import md_table

from .base import TOOL_PREFIX, build_tool
from .model import ToolAnnotations, ToolDescriptor

GROUP = "session"

PLATFORM_INFO = f"{TOOL_PREFIX}session_platform_info"
PACKAGE_INFO = f"{TOOL_PREFIX}session_package_info"

_TITLES = {
    "loaded": "Loaded Packages",
    "installed": "Installed Packages",
}


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------


def platform_date(when: datetime | None = None) -> str:
    when = when or datetime.now()
    return when.strftime("%A, %B %d, %Y (%Y-%m-%d)")


def _detect_ui() -> str | None:
    if os.environ.get("POSITRON") == "1":
        return "Positron (a VS Code equivalent)"
    if os.environ.get("RSTUDIO") == "1":
        return "RStudio"
    if os.environ.get("TERM_PROGRAM") == "vscode":
        return "VS Code"
    if "PYCHARM_HOSTED" in os.environ:
        return "PyCharm"
    return None


def platform_details() -> dict[str, str]:
    """Python, OS, locale and time settings of this process."""
    language, encoding = locale.getlocale()
    details = {
        "python_version": f"{platform.python_implementation()} {platform.python_version()}",  # noqa: E501
        "os": platform.platform(),
        "system": f"{platform.machine()}, {sys.platform}",
        "locale": language or "C",
        "encoding": encoding or locale.getpreferredencoding(False),
        "timezone": datetime.now().astimezone().tzname() or "UTC",
        "date": platform_date(),
    }
    ui = _detect_ui()
    if ui:
        details["ui"] = ui
    return details


def platform_info() -> str:
    """Describe the user's platform inside ``<system_info>`` tags."""
    lines = [f"{key.upper()}: {value}" for key, value in platform_details().items()]
    return "<system_info>\n" + "\n".join(lines) + "\n</system_info>"


class PlatformInfoInput(BaseModel):
    pass


PLATFORM_INFO_ANNOTATIONS = ToolAnnotations(
    title="Platform Info",
    read_only_hint=True,
    open_world_hint=False,
    idempotent_hint=True,
)


def platform_info_tool():
    return build_tool(
        platform_info,
        name=PLATFORM_INFO,
        description="Describes the Python version, operating system, "
        "language and locale settings for the user's system.",
        args_schema=PlatformInfoInput,
        annotations=PLATFORM_INFO_ANNOTATIONS,
    )


# ---------------------------------------------------------------------------
# Packages
# ---------------------------------------------------------------------------


def _parse_dependencies(dependencies: str | bool) -> bool:
    if isinstance(dependencies, bool):
        return dependencies
    return dependencies.strip().lower() in ("true", "yes", "1")


def _installed_names() -> list[str]:
    names = {dist.metadata["Name"] for dist in metadata.distributions()}
    return sorted(filter(None, names), key=str.lower)


def _loaded_names() -> list[str]:
    by_module = metadata.packages_distributions()
    loaded = {
        dist
        for module in list(sys.modules)
        if "." not in module
        for dist in by_module.get(module, [])
    }
    return sorted(loaded, key=str.lower)


def package_info(packages: str = "loaded", dependencies: str | bool = "") -> str:
    """Report versions of installed distributions.

    ``packages`` is ``"loaded"`` (distributions with an imported module),
    ``"installed"`` or a comma-separated list of distribution names.
    """
    names = [name.strip() for name in packages.split(",") if name.strip()]
    title = None
    if len(names) == 1 and names[0] in _TITLES:
        title = _TITLES[names[0]]
        names = _loaded_names() if names[0] == "loaded" else _installed_names()

    with_requires = _parse_dependencies(dependencies)
    rows = []
    for name in names:
        try:
            version = metadata.version(name)
        except metadata.PackageNotFoundError:
            rows.append({"package": name, "version": "Package is not installed"})
            continue
        row = {"package": name, "version": version}
        if with_requires:
            row["requires"] = "; ".join(metadata.requires(name) or [])
        rows.append(row)

    columns = ["package", "version"]
    if with_requires:
        columns.append("requires")
    table = md_table(rows, columns)
    return f"### {title}\n\n{table}" if title else table


class PackageInfoInput(BaseModel):
    packages: str = Field(
        default="loaded",
        description="Provide a comma-separated list of package names to check "
        "that these packages are installed and to confirm which versions of the "
        'packages are available. Use the single string "loaded" to show packages '
        "that are imported in the current session. Finally, the string "
        '"installed" lists all installed packages. Try using the other available '
        "options prior to listing all installed packages.",
    )
    dependencies: str = Field(
        default="",
        description='Use `dependencies = "true"` to also list the requirements '
        "of each package.",
    )


PACKAGE_INFO_ANNOTATIONS = ToolAnnotations(
    title="Package Info",
    read_only_hint=True,
    open_world_hint=False,
    idempotent_hint=True,
)


def package_info_tool():
    return build_tool(
        package_info,
        name=PACKAGE_INFO,
        description="Verify that a specific package is installed, or find out "
        "which packages are in use in the current session. As a last resort, "
        "this function can also list all installed packages.",
        args_schema=PackageInfoInput,
        annotations=PACKAGE_INFO_ANNOTATIONS,
    )


def register_session_tools(registry) -> None:
    """Register the session tools under the `session` group."""
    for name, factory, annotations in (
        (PLATFORM_INFO, platform_info_tool, PLATFORM_INFO_ANNOTATIONS),
        (PACKAGE_INFO, package_info_tool, PACKAGE_INFO_ANNOTATIONS),
    ):
        registry.register(
            ToolDescriptor(
                name=name, group=GROUP, factory=factory, annotations=annotations
            )
        )
