
import argparse
import json
import logging
import os
import sys
import time
from erd_compose_core.lib.catalog import db2_connection_string
from erd_compose_core.lib.deploy import diff_script, deploy
from erd_compose_core.lib.errors import ErdComposeError


def write_to_file(changes, filename, output_format):
    """Write changes to file in the specified format."""
    with open(filename, 'w', encoding='utf-8') as f:
        if output_format == "sql":
            f.write(changes.to_sql())
        elif output_format == "json":
            json.dump(changes.to_dict_list(), f, indent=2)


def preview_commands(changes, title="Statements"):
    """Show a preview of statements with truncation for long ones."""
    statements = [op.command for op in changes.flatten()]

    logging.info(f"{title}:")
    logging.info("=" * 50)

    # Show first 5 statements and last 5 statements if there are more than 10
    if len(statements) <= 10:
        shown = list(enumerate(statements, 1))
    else:
        shown = list(enumerate(statements[:5], 1))
    for i, text in shown:
        text = " ".join(text.split())
        logging.info(f"{i}. {text[:100] + '...' if len(text) > 100 else text}")

    if len(statements) > 10:
        logging.info(f"... ({len(statements) - 10} more statements) ...")
        for i, text in enumerate(statements[-5:], len(statements) - 4):
            text = " ".join(text.split())
            logging.info(f"{i}. {text[:100] + '...' if len(text) > 100 else text}")
    logging.info("=" * 50)


def build_parser():
    parser = argparse.ArgumentParser(
        description="erd-compose: reconcile an ERD design file with a DB2 schema"
    )
    parser.add_argument("design", help="Design file (.vuerd.json) exported by the ERD editor")
    parser.add_argument("--schema", required=True, help="Catalog schema (table creator) to compare against")

    catalog = parser.add_argument_group("catalog source")
    catalog.add_argument("--dsn", help="Full DB2 connection string (DATABASE=...;HOSTNAME=...;...)")
    catalog.add_argument("--catalog-json", help="Catalog snapshot: JSON list of SYSCOLUMNS rows")
    catalog.add_argument("--database", help="DB2 database name")
    catalog.add_argument("--hostname", help="DB2 host")
    catalog.add_argument("--port", default="50000", help="DB2 port (default: 50000)")
    catalog.add_argument("--uid", help="DB2 user")
    catalog.add_argument("--pwd", default=os.environ.get("DB2_PWD"), help="DB2 password (default: $DB2_PWD)")

    parser.add_argument(
        "--save-on",
        help="Folder to write the script into as <timestamp>.sql (default: print to stdout)"
    )
    parser.add_argument(
        "--output-format",
        choices=["sql", "json"],
        default="sql",
        help="Output format (default: sql)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)"
    )
    return parser


def resolve_catalog_source(args, parser):
    """Pick the catalog source from the mutually exclusive flag sets."""
    if args.catalog_json:
        return args.catalog_json
    if args.dsn:
        return args.dsn
    if args.database and args.hostname and args.uid:
        return db2_connection_string(args.database, args.hostname, args.port, args.uid, args.pwd or "")
    parser.error("a catalog source is required: --catalog-json, --dsn, or --database/--hostname/--uid")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Set log level based on verbosity count
    if args.verbose == 0:
        log_level = logging.WARNING
    elif args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    # Configure logging
    logging.basicConfig(
        level=log_level,
        format='%(levelname)s: %(message)s',
        datefmt='%H:%M:%S'
    )

    catalog_source = resolve_catalog_source(args, parser)

    try:
        result = diff_script(args.design, catalog_source, schema=args.schema)
    except ErdComposeError as e:
        logging.error(str(e))
        return 1

    preview_commands(result, "Schema differences found")

    if args.save_on and args.output_format == "json":
        os.makedirs(args.save_on, exist_ok=True)
        target = os.path.join(args.save_on, f"{int(time.time() * 1000)}.json")
        write_to_file(result, target, "json")
        print(f"Changes written to: {target}")
    elif args.save_on:
        outcome = deploy(result, save_on=args.save_on)
        print(f"Script written to: {outcome['target']}")
    elif args.output_format == "json":
        print(json.dumps(result.to_dict_list(), indent=2))
    else:
        sys.stdout.write(deploy(result)["sql"])

    return 0


if __name__ == "__main__":
    sys.exit(main())
