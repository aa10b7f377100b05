"""Quick utility to inspect the capabilities of a WFS server."""

from __future__ import annotations

import orjson
from django.core.management import BaseCommand, CommandError, CommandParser

from wfsclient.client import WFSClient
from wfsclient.exceptions import WFSClientError
from wfsclient.schemas import schema_registry


class Command(BaseCommand):
    """Print the capabilities of a WFS server as JSON."""

    help = (
        "Read the capabilities of a WFS server. This can be done using:"
        "  manage.py wfscapabilities https://example.com/wfs --feature-types"
    )

    def add_arguments(self, parser: CommandParser):
        parser.add_argument("url", help="The WFS service endpoint.")
        parser.add_argument(
            "--wfs-version",
            dest="wfs_version",
            choices=schema_registry.versions,
            help="Use this protocol version, instead of negotiating it with the server.",
        )
        parser.add_argument(
            "--timeout",
            type=float,
            help="Timeout in seconds for each request.",
        )
        parser.add_argument(
            "--feature-types",
            action="store_true",
            help="Only print the feature types.",
        )

    def handle(self, *args, **options):
        kwargs = {}
        if options["timeout"] is not None:
            kwargs["timeout"] = options["timeout"]

        client = WFSClient(options["url"], version=options["wfs_version"], **kwargs)
        with client:
            try:
                if options["feature_types"]:
                    data = client.feature_types()
                else:
                    data = client.capabilities()
            except WFSClientError as e:
                raise CommandError(str(e)) from e

        if options["verbosity"] >= 2:
            self.stderr.write(f"Using WFS {client.version}")

        self.stdout.write(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())
