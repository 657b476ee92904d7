"""Main CLI entry point for the zdocs command.

This module provides the Typer application that inspects a documentation
hierarchy loaded from a property store snapshot: version listings, tables
of contents, inheritance, permissions, eligibility and navigation.
"""

import logging
import sys
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import typer

from src.cli.errors import CLIError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.session import ZDocsSession
from src.hierarchy.errors import InheritanceChainExhaustedError
from src.hierarchy.path_model import parent_of
from src.models.page_node import ManualNode, PageNode, ProductNode, TopicNode, VersionNode
from src.models.page_type import PageType
from src.models.viewer import KNOWN_CAPABILITIES, ViewerContext
from src.permissions.permission_engine import PermissionResult
from src.property_store.errors import StoreError, ZDocsError

app = typer.Typer(
    name="zdocs",
    help="""Inspect a Product/Version/Manual/Topic documentation hierarchy.

EXAMPLES:
  zdocs versions Foo                        # Visible versions of a product
  zdocs toc Foo/1.0/Guide --show-errors     # Table of contents with orphans
  zdocs inherit Foo/2.0/Guide/Intro         # Where inherited content comes from
  zdocs permissions Foo/2.0 --user Alice    # Read/edit decisions""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".zdocs/config.yaml"

_config_option = typer.Option(
    DEFAULT_CONFIG_PATH,
    "--config",
    "-c",
    help="Path to the zdocs configuration file",
)
_user_option = typer.Option(
    None,
    "--user",
    "-u",
    help="Viewer identity (matched against product role lists)",
)
_capability_option = typer.Option(
    None,
    "--capability",
    help="Global capability held by the viewer: administer, edit or preview (repeatable)",
)
_query_option = typer.Option(
    None,
    "--query",
    "-q",
    help="Request query parameter as key=value (repeatable)",
    metavar="KEY=VALUE",
)
_logdir_option = typer.Option(
    None,
    "--logdir",
    help="Directory for log files (creates timestamped log file)",
)
_verbosity_option = typer.Option(
    0,
    "--verbosity",
    "-v",
    help="Verbosity level: 0=summary, 1=info, 2=debug",
)
_no_color_option = typer.Option(
    False,
    "--no-color",
    help="Disable colored output",
)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    # Repeated invocations in one process must not stack handlers
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"zdocs_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _parse_query(pairs: Optional[List[str]]) -> Dict[str, str]:
    """Parse repeated key=value options into a query dictionary.

    Raises:
        typer.BadParameter: If a pair has no '='
    """
    query = {}
    for pair in pairs or []:
        if '=' not in pair:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint="--query")
        key, value = pair.split('=', 1)
        query[key.strip()] = value.strip()
    return query


def _build_viewer(
    user: Optional[str],
    capabilities: Optional[List[str]],
    query: Optional[List[str]]
) -> ViewerContext:
    unknown = sorted(set(capabilities or []) - KNOWN_CAPABILITIES)
    if unknown:
        raise typer.BadParameter(
            f"Unknown capability: {', '.join(unknown)}", param_hint="--capability"
        )
    return ViewerContext(
        name=user,
        capabilities=frozenset(capabilities or []),
        query=_parse_query(query),
    )


@contextmanager
def _command_errors(output: OutputHandler) -> Iterator[None]:
    """Map project errors onto exit codes.

    Configuration and snapshot failures exit with CONFIG_ERROR, inheritance
    chains without a source with INHERITANCE_ERROR, anything else with
    GENERAL_ERROR.
    """
    try:
        yield
    except InheritanceChainExhaustedError as e:
        logger.error(f"Inheritance failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.INHERITANCE_ERROR)
    except (CLIError, StoreError) as e:
        logger.error(f"Configuration failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.CONFIG_ERROR)
    except ZDocsError as e:
        logger.error(f"Command failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _start(verbosity: int, no_color: bool, logdir: Optional[str] = None) -> OutputHandler:
    _configure_logging(verbosity, logdir)
    return OutputHandler(verbosity=verbosity, no_color=no_color)


def _require_type(output: OutputHandler, node: PageNode, node_class: type, label: str) -> None:
    if not isinstance(node, node_class):
        output.error(f"{node.page_id} is a {node.page_type.value} page, not a {label} page")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


@app.command()
def versions(
    product: str = typer.Argument(..., help="Product page"),
    config: str = _config_option,
    user: Optional[str] = _user_option,
    capability: Optional[List[str]] = _capability_option,
    query: Optional[List[str]] = _query_option,
    logdir: Optional[str] = _logdir_option,
    verbosity: int = _verbosity_option,
    no_color: bool = _no_color_option,
) -> None:
    """List the versions of a product the viewer may see, oldest first."""
    output = _start(verbosity, no_color, logdir)
    viewer = _build_viewer(user, capability, query)
    with _command_errors(output):
        session = ZDocsSession.open(config)
        node = session.resolver.require(product, viewer)
        _require_type(output, node, ProductNode, PageType.PRODUCT.value)

        ordered = session.version_index.versions(node, viewer)
        output.table(
            f"Versions of {node.display_name}",
            ["Version", "Status", "Inherits"],
            [
                [version.version_string, version.status.value, "yes" if version.inherit else "no"]
                for version in ordered
            ],
            empty_message=f"No visible versions of {product}",
        )


@app.command()
def manuals(
    version: str = typer.Argument(..., help="Version page"),
    config: str = _config_option,
    user: Optional[str] = _user_option,
    capability: Optional[List[str]] = _capability_option,
    query: Optional[List[str]] = _query_option,
    logdir: Optional[str] = _logdir_option,
    verbosity: int = _verbosity_option,
    no_color: bool = _no_color_option,
) -> None:
    """Show a version's manuals in declared order."""
    output = _start(verbosity, no_color, logdir)
    viewer = _build_viewer(user, capability, query)
    with _command_errors(output):
        session = ZDocsSession.open(config)
        node = session.resolver.require(version, viewer)
        _require_type(output, node, VersionNode, PageType.VERSION.value)

        listing = session.manuals.build(node, viewer)
        output.table(
            f"Manuals of {node.page_id}",
            ["Manual", "Page"],
            [
                [entry.name, entry.manual.page_id if entry.matched else "(missing)"]
                for entry in listing.entries
            ],
            empty_message=f"{version} has no manuals list",
        )
        for name in listing.unmatched:
            output.warning(f"Listed manual does not exist: {name}")
        for name in listing.extra_manuals:
            output.warning(f"Manual not in the manuals list: {name}")
        output.debug(session.manuals.render(listing))


@app.command()
def toc(
    manual: str = typer.Argument(..., help="Manual page"),
    show_errors: bool = typer.Option(
        False,
        "--show-errors",
        help="Include the orphaned-topics warning in the rendered markup",
    ),
    config: str = _config_option,
    user: Optional[str] = _user_option,
    capability: Optional[List[str]] = _capability_option,
    query: Optional[List[str]] = _query_option,
    logdir: Optional[str] = _logdir_option,
    verbosity: int = _verbosity_option,
    no_color: bool = _no_color_option,
) -> None:
    """Build a manual's table of contents."""
    output = _start(verbosity, no_color, logdir)
    viewer = _build_viewer(user, capability, query)
    with _command_errors(output):
        session = ZDocsSession.open(config)
        node = session.resolver.require(manual, viewer)
        _require_type(output, node, ManualNode, PageType.MANUAL.value)

        result = session.toc.build(node, viewer)
        output.table(
            f"Table of contents of {node.display_name}",
            ["#", "Topic"],
            [[str(position), name] for position, name in enumerate(result.ordered_topics, start=1)],
            empty_message=f"{manual} has no topics in its table of contents",
        )
        for name in result.orphans:
            output.warning(f"Topic not in the table of contents: {name}")
        output.markup(session.toc.table_of_contents(node, viewer, show_errors=show_errors))


@app.command()
def inherit(
    page: str = typer.Argument(..., help="Version, Manual or Topic page"),
    param: Optional[str] = typer.Option(
        None,
        "--param",
        "-p",
        help="Resolve this property (e.g. ZDocsDisplayName) instead of content",
    ),
    config: str = _config_option,
    user: Optional[str] = _user_option,
    capability: Optional[List[str]] = _capability_option,
    query: Optional[List[str]] = _query_option,
    logdir: Optional[str] = _logdir_option,
    verbosity: int = _verbosity_option,
    no_color: bool = _no_color_option,
) -> None:
    """Show where a page's content, or one of its parameters, comes from."""
    output = _start(verbosity, no_color, logdir)
    viewer = _build_viewer(user, capability, query)
    with _command_errors(output):
        session = ZDocsSession.open(config)
        node = session.resolver.require(page, viewer)

        if param is not None:
            value = session.inheritance.resolve_inherited_param(node, param, viewer)
            if value is None:
                output.print(f"{param} is not set for {page}")
            else:
                output.print(f"{param} = {value}")
            return

        source = session.inheritance.resolve_inherited_content(node, viewer)
        if source is None:
            output.print(f"{page} does not inherit content")
        else:
            output.print(f"{page} inherits content from {source.page_id}")

        for version_string, equivalent_id in session.inheritance.equivalents_in_other_versions(node, viewer):
            output.info(f"  {version_string}: {equivalent_id}")


@app.command()
def permissions(
    page: str = typer.Argument(..., help="Any hierarchy page"),
    config: str = _config_option,
    user: Optional[str] = _user_option,
    capability: Optional[List[str]] = _capability_option,
    query: Optional[List[str]] = _query_option,
    logdir: Optional[str] = _logdir_option,
    verbosity: int = _verbosity_option,
    no_color: bool = _no_color_option,
) -> None:
    """Show whether the viewer may read and edit a page.

    Exits with PERMISSION_DENIED when reading is denied.
    """
    output = _start(verbosity, no_color, logdir)
    viewer = _build_viewer(user, capability, query)
    with _command_errors(output):
        session = ZDocsSession.open(config)
        read = session.permissions.check(page, viewer, 'read')
        edit = session.permissions.check(page, viewer, 'edit')

    output.table(
        f"Permissions on {page}",
        ["Action", "Result"],
        [["read", read.value], ["edit", edit.value]],
    )
    if read is PermissionResult.DENIED:
        raise typer.Exit(ExitCode.PERMISSION_DENIED)


@app.command()
def check(
    page: str = typer.Argument(..., help="Page to check"),
    page_type: str = typer.Option(
        ...,
        "--type",
        "-t",
        help="Declared type: Product, Version, Manual or Topic",
    ),
    config: str = _config_option,
    logdir: Optional[str] = _logdir_option,
    verbosity: int = _verbosity_option,
    no_color: bool = _no_color_option,
) -> None:
    """Check whether a page may be declared with a type."""
    output = _start(verbosity, no_color, logdir)
    try:
        declared = PageType(page_type.strip().capitalize())
    except ValueError:
        raise typer.BadParameter(
            f"Unknown page type '{page_type}'", param_hint="--type"
        )

    with _command_errors(output):
        session = ZDocsSession.open(config)
        parent_id = parent_of(page)
        message = session.resolver.check_eligibility(declared, parent_id, page)

    if message is not None:
        output.error(message)
        raise typer.Exit(ExitCode.CONFIG_ERROR)
    output.success(f"{page} may be a {declared.value} page")


@app.command()
def navigation(
    topic: str = typer.Argument(..., help="Topic page"),
    config: str = _config_option,
    user: Optional[str] = _user_option,
    capability: Optional[List[str]] = _capability_option,
    query: Optional[List[str]] = _query_option,
    logdir: Optional[str] = _logdir_option,
    verbosity: int = _verbosity_option,
    no_color: bool = _no_color_option,
) -> None:
    """Show the previous and next topics of a topic in a paginated manual."""
    output = _start(verbosity, no_color, logdir)
    viewer = _build_viewer(user, capability, query)
    with _command_errors(output):
        session = ZDocsSession.open(config)
        node = session.resolver.require(topic, viewer)
        _require_type(output, node, TopicNode, PageType.TOPIC.value)

        if node.invalid and not node.standalone:
            output.warning(f"{topic} is not inside a Manual page")
        previous_topic, next_topic = session.toc.navigation(node, viewer)

    output.print(f"Previous: {previous_topic.page_id if previous_topic else '(none)'}")
    output.print(f"Next: {next_topic.page_id if next_topic else '(none)'}")


@app.command()
def context(
    page: str = typer.Argument(..., help="Any hierarchy page"),
    config: str = _config_option,
    user: Optional[str] = _user_option,
    capability: Optional[List[str]] = _capability_option,
    query: Optional[List[str]] = _query_option,
    logdir: Optional[str] = _logdir_option,
    verbosity: int = _verbosity_option,
    no_color: bool = _no_color_option,
) -> None:
    """Show the product, version and manual names a page is shown under."""
    output = _start(verbosity, no_color, logdir)
    viewer = _build_viewer(user, capability, query)
    with _command_errors(output):
        session = ZDocsSession.open(config)
        node = session.resolver.require(page, viewer)
        product, version, manual = session.resolver.context_names(node)

    output.print(f"Product: {product or '(none)'}")
    output.print(f"Version: {version or '(none)'}")
    output.print(f"Manual: {manual or '(none)'}")


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
