"""edgeship publish command - Publish a script with an adhoc migration.

The class-change flags are compiled into an AdhocMigrations descriptor and
attached to the publish request metadata. Click enforces the arity of
``--rename-class`` (2 values) and ``--transfer-class`` (3 values), so the
compiler only ever sees complete groups.
"""

from __future__ import annotations

import click

from edgeship_cli.context import get_cli_context
from edgeship_cli.errors import handle_edgeship_error
from edgeship_cli.output import info, print_json, print_summary, success, warning
from edgeship_core.errors import EdgeshipError


@click.command()
@click.option(
    "--release",
    is_flag=True,
    default=False,
    hidden=True,
    help="[deprecated] alias of edgeship publish",
)
@click.option(
    "--output",
    "output_format",
    type=click.Choice(["json"]),
    default=None,
    help="Print the publish metadata as JSON.",
)
@click.option(
    "--new-class",
    "new_classes",
    multiple=True,
    metavar="CLASS",
    help="Allow durable objects to be created from a class in your script.",
)
@click.option(
    "--delete-class",
    "deleted_classes",
    multiple=True,
    metavar="CLASS",
    help="Delete all durable objects associated with a class in your script.",
)
@click.option(
    "--rename-class",
    "renamed",
    multiple=True,
    nargs=2,
    metavar="FROM_CLASS TO_CLASS",
    help="Rename a durable object class.",
)
@click.option(
    "--transfer-class",
    "transferred",
    multiple=True,
    nargs=3,
    metavar="FROM_SCRIPT FROM_CLASS TO_CLASS",
    help=(
        "Transfer all durable objects associated with a class in another script "
        "to a class in this script."
    ),
)
@click.option(
    "--old-tag",
    type=str,
    default=None,
    help="Specify the existing migration tag for the script.",
)
@click.option(
    "--new-tag",
    type=str,
    default=None,
    help="Specify the new migration tag for the script.",
)
def publish(
    release: bool,
    output_format: str | None,
    new_classes: tuple[str, ...],
    deleted_classes: tuple[str, ...],
    renamed: tuple[tuple[str, str], ...],
    transferred: tuple[tuple[str, str, str], ...],
    old_tag: str | None,
    new_tag: str | None,
) -> None:
    """Publish your script, optionally migrating durable object classes.

    Examples:

        edgeship publish

        edgeship publish --new-class Counter --new-tag v1

        edgeship publish --rename-class Room ChatRoom --old-tag v1 --new-tag v2

        edgeship publish --transfer-class legacy-chat Room ChatRoom --output json
    """
    if release:
        warning("--release is deprecated and will be removed; use `edgeship publish`.")

    settings = get_cli_context().load_settings()

    try:
        # Import here to avoid heavy imports at CLI startup
        from edgeship_core.migrations import ClassChangeSet, compile_adhoc_migration
        from edgeship_core.publish import PublishRequest

        changes = ClassChangeSet(
            new_classes=list(new_classes),
            deleted_classes=list(deleted_classes),
            renamed=list(renamed),
            transferred=list(transferred),
            old_tag=old_tag,
            new_tag=new_tag,
        )
        migrations = compile_adhoc_migration(changes)
        request = PublishRequest(script_name=settings.name, migrations=migrations)
    except EdgeshipError as e:
        handle_edgeship_error(e)

    metadata = request.to_metadata()

    if output_format == "json":
        print_json({"script": request.script_name, "metadata": metadata})
        return

    if migrations is None:
        info(f"No migration for {request.script_name}")
    else:
        rows = [
            ("Old tag", migrations.old_tag or "-"),
            ("New tag", migrations.new_tag or "-"),
        ]
        if migrations.migration is not None:
            durable_objects = migrations.migration.durable_objects
            rows.extend(
                [
                    ("New classes", ", ".join(durable_objects.new_classes) or "-"),
                    ("Deleted classes", ", ".join(durable_objects.deleted_classes) or "-"),
                    (
                        "Renamed classes",
                        ", ".join(
                            f"{r.from_class} -> {r.to_class}"
                            for r in durable_objects.renamed_classes
                        )
                        or "-",
                    ),
                    (
                        "Transferred classes",
                        ", ".join(
                            f"{t.from_script}:{t.from_class} -> {t.to_class}"
                            for t in durable_objects.transferred_classes
                        )
                        or "-",
                    ),
                ]
            )
        print_summary(f"Migration for {request.script_name}", rows)

    success(f"Prepared publish request for {request.script_name}")
