from __future__ import annotations

from pathlib import Path
import shlex

from nginx_sm import system
from nginx_sm.config import SiteContext
from nginx_sm.ui import ui

OK = 0
ERROR = 1
CANCELLED = 2
ALREADY_ENABLED = 2
CONFIG_TEST_FAILED = 3


class InvalidSiteName(ValueError):
    pass


def validate_site_name(name: str | None, action: str = "") -> str:
    if not name:
        target = f" to {action}" if action else ""
        raise InvalidSiteName(f"No site specified{target}. Use -h for help.")
    if name.isspace():
        raise InvalidSiteName("The string consists only of spaces. Exiting the script.")
    if "/" in name or name in (".", ".."):
        raise InvalidSiteName(f"Invalid site name: {name}")
    return name


def _present(path: Path) -> bool:
    # A dangling symlink still counts as an entry.
    return path.exists() or path.is_symlink()


def _entries(directory: Path) -> list[str]:
    return sorted(entry.name for entry in directory.iterdir() if not entry.name.startswith("."))


def enable(ctx: SiteContext, site: str) -> int:
    available_path = ctx.sites_available / site
    enabled_path = ctx.sites_enabled / site

    if not _present(available_path):
        ui.info("Site does not appear to exist.")
        return ERROR
    if _present(enabled_path):
        ui.info("Site appears to already be enabled.")
        return ALREADY_ENABLED

    system.require_root(ctx.is_root)
    enabled_path.symlink_to(available_path)

    try:
        passed = ctx.nginx.test_config()
    except BaseException:
        enabled_path.unlink()
        raise

    if passed:
        ui.info("Configuration test passed. Reloading Nginx.")
        ctx.nginx.reload()
        ui.info("Site enabled and Nginx reloaded.")
        return OK

    if ctx.nginx.last_error:
        ui.fail(ctx.nginx.last_error)
    ui.info("Configuration test failed. Disabling the site.")
    enabled_path.unlink()
    return CONFIG_TEST_FAILED


def disable(ctx: SiteContext, site: str) -> int:
    enabled_path = ctx.sites_enabled / site
    if not _present(enabled_path):
        ui.info("Site does not appear to be enabled.")
        return OK
    system.require_root(ctx.is_root)
    enabled_path.unlink()
    ui.info("Site disabled.")
    return OK


def list_sites(ctx: SiteContext) -> int:
    ui.info("Available sites (not enabled):")
    for name in _entries(ctx.sites_available):
        if not _present(ctx.sites_enabled / name):
            ui.item(name)

    ui.info("\nEnabled sites:")
    for name in _entries(ctx.sites_enabled):
        ui.item(name)
    return OK


def _editor_argv(editor: str) -> list[str] | None:
    argv = shlex.split(editor)
    if not argv or not system.has_cmd(argv[0]):
        return None
    return argv


def _launch_editor(ctx: SiteContext, path: Path) -> int:
    argv = _editor_argv(ctx.editor)
    if argv is None:
        ui.info(f"Editor {ctx.editor} not found.")
        return ERROR
    system.run([*argv, str(path)], check=False, capture=False)
    return OK


def edit(ctx: SiteContext, site: str) -> int:
    available_path = ctx.sites_available / site
    if not _present(available_path):
        ui.info("Site does not appear to exist.")
        return ERROR
    return _launch_editor(ctx, available_path)


def create(ctx: SiteContext, site: str) -> int:
    available_path = ctx.sites_available / site
    if _present(available_path):
        ui.info("Site already exists.")
        return OK

    system.require_root(ctx.is_root)
    available_path.touch()
    ui.info("Site created.")

    answer = ctx.input.keypress("Do you want to edit the new site? [y/n]: ")
    if answer.lower().startswith("y"):
        return _launch_editor(ctx, available_path)
    return OK


def remove(ctx: SiteContext, site: str) -> int:
    available_path = ctx.sites_available / site
    enabled_path = ctx.sites_enabled / site

    if not _present(available_path) and not _present(enabled_path):
        ui.info("Site does not appear to exist.")
        return ERROR

    system.require_root(ctx.is_root)

    ui.info(f"You are about to remove the site: {site}")
    confirmation = ctx.input.line("Type 'yes' to confirm")
    if confirmation != "yes":
        ui.info("Site removal cancelled.")
        return CANCELLED

    if _present(enabled_path):
        enabled_path.unlink()
        ui.info(f"Removed symlink from {enabled_path}.")
    if _present(available_path):
        available_path.unlink()
        ui.info(f"Removed file from {available_path}.")

    ui.info(f"Site {site} removed successfully.")
    return OK
