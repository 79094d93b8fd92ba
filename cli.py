"""Command-line entry point for the site CMS.

``cms serve`` runs the admin server, ``cms generate`` rebuilds the static
pages from the JSON documents and ``cms migrate`` performs the one-time
conversion of the hand-written site into JSON documents.
"""

import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

import generator
import migration
import site_config

app = App(name="cms", help="Manage the site content and regenerate its static pages.")

PageName = typ.Literal["all", "homepage", "projects", "project"]


@app.command(help="Run the admin server and API.")
def serve(
    *,
    host: str = "127.0.0.1",
    port: typ.Annotated[int | None, Parameter(help="Defaults to $PORT or 3000")] = None,
    debug: bool = False,
) -> None:
    from app import app as flask_app

    port = port or site_config.server_port()
    print(f"Admin:   http://{host}:{port}/admin/")
    print(f"Website: http://{host}:{port}/index.html")
    flask_app.run(host=host, port=port, debug=debug)


@app.command(help="Regenerate static HTML pages from the JSON documents.")
def generate(
    *,
    page: typ.Annotated[PageName, Parameter(help="Which page(s) to rebuild")] = "all",
    slug: typ.Annotated[str | None, Parameter(help="Project slug for --page project")] = None,
) -> None:
    """Rebuild one page, one page family, or the whole site.

    Raises
    ------
    ValueError
        If ``--page project`` is given without ``--slug``.
    """
    if page == "homepage":
        generator.generate_homepage()
    elif page == "projects":
        generator.generate_projects_index()
    elif page == "project":
        if not slug:
            msg = "--slug is required when --page is 'project'."
            raise ValueError(msg)
        generator.generate_project_page(slug)
    else:
        generator.generate_all()


@app.command(help="Convert the legacy static HTML into JSON documents.")
def migrate(
    *,
    website_root: typ.Annotated[
        Path | None, Parameter(help="Site checkout to scrape (defaults to $CMS_WEBSITE_ROOT)")
    ] = None,
) -> None:
    root = website_root or site_config.website_root()
    print("Starting content migration...\n")
    migration.migrate(root)
    print("\nMigration complete!")


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
