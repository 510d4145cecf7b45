import subprocess

import typer
from typer.core import TyperCommand

from nginx_sm import config, system
from nginx_sm import nginx as nginx_module
from nginx_sm import site as site_module
from nginx_sm.ui import ui


# typer may ship its own click, so take UsageError from the class typer exports.
UsageError = next(cls for cls in typer.BadParameter.__mro__ if cls.__name__ == "UsageError")


class SiteManagerCommand(TyperCommand):
    """Usage errors exit with 1 and a hint instead of click's 2."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except UsageError as exc:
            ui.fail(f"{exc.format_message()} Use -h for help.")
            raise typer.Exit(code=1)


app = typer.Typer(add_completion=False)


def _validate_args(targets, editor):
    for action, value in targets:
        if value is not None:
            site_module.validate_site_name(value, action)
    if editor is not None:
        if not editor:
            raise site_module.InvalidSiteName("No editor specified. Use -h for help.")
        if editor.isspace():
            raise site_module.InvalidSiteName("The string consists only of spaces. Exiting the script.")


def _build_context(editor, verbose):
    settings = config.read_settings()
    nginx = nginx_module.Nginx(settings.nginx_binary, verbose=verbose)
    sites_available, sites_enabled = config.resolve_site_dirs(settings, nginx)
    return config.SiteContext(
        sites_available=sites_available,
        sites_enabled=sites_enabled,
        nginx=nginx,
        editor=editor or settings.editor,
        is_root=system.is_root,
    )


def run_operations(site_ctx, enable=None, disable=None, list_sites=False, edit=None, create=None, remove=None):
    """Run the requested operations in fixed order; return the first non-zero code."""
    codes = []
    if enable is not None:
        codes.append(site_module.enable(site_ctx, enable))
    if disable is not None:
        codes.append(site_module.disable(site_ctx, disable))
    if list_sites:
        codes.append(site_module.list_sites(site_ctx))
    if edit is not None:
        codes.append(site_module.edit(site_ctx, edit))
    if create is not None:
        codes.append(site_module.create(site_ctx, create))
    if remove is not None:
        codes.append(site_module.remove(site_ctx, remove))
    return next((code for code in codes if code), 0)


@app.command(cls=SiteManagerCommand, context_settings={"help_option_names": []})
def nginx_sm(
    ctx: typer.Context,
    enable: str = typer.Option(None, "-e", "--enable", metavar="SITE", help="Enable site."),
    disable: str = typer.Option(None, "-d", "--disable", metavar="SITE", help="Disable site."),
    list_: bool = typer.Option(False, "-l", "--list", help="List sites."),
    edit: str = typer.Option(None, "-ed", "--edit", metavar="SITE", help="Edit site configuration."),
    editor: str = typer.Option(None, "--editor", metavar="EDITOR", help="Set editor for editing configurations."),
    create: str = typer.Option(None, "-c", "--create", metavar="SITE", help="Create a new site configuration."),
    remove: str = typer.Option(None, "-rm", "--remove", metavar="SITE", help="Remove an existing site configuration."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show nginx command output."),
    show_help: bool = typer.Option(False, "-h", "--help", help="Display this help message."),
):
    """nginx Site Manager: enable, disable, list, edit, create and remove sites."""
    targets = (("enable", enable), ("disable", disable), ("edit", edit), ("create", create), ("remove", remove))
    try:
        _validate_args(targets, editor)
    except site_module.InvalidSiteName as exc:
        ui.fail(str(exc))
        raise typer.Exit(code=1)

    requested = list_ or any(value is not None for _action, value in targets)
    if show_help or not requested:
        if show_help and requested:
            ui.warn("--help was provided along with other options. Ignoring other options.")
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    site_ctx = _build_context(editor, verbose)
    try:
        code = run_operations(
            site_ctx,
            enable=enable,
            disable=disable,
            list_sites=list_,
            edit=edit,
            create=create,
            remove=remove,
        )
    except PermissionError as exc:
        ui.fail(str(exc))
        raise typer.Exit(code=1)
    except subprocess.CalledProcessError:
        raise typer.Exit(code=1)
    raise typer.Exit(code=code)


def main():
    app()
