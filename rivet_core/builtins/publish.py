"""Built-in commands for publishing applications as bundles."""

from __future__ import annotations

import logging
import sys
import tempfile
from argparse import ArgumentParser, Namespace
from pathlib import Path

from rivet_core.api import RivetAbstractCommand, rivetcommand
from rivet_core.publish import (
    DEFAULT_APP_FILE,
    BundleClient,
    PublishError,
    expand_manifest,
    write_bundle,
)
from rivet_core.publish.client import SERVER_URL_ENV

logger = logging.getLogger(__name__)


def _add_app_file_argument(parser: ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--file",
        dest="app",
        type=Path,
        default=Path(DEFAULT_APP_FILE),
        metavar="APP_CONFIG_FILE",
        help=f"Path to {DEFAULT_APP_FILE}",
    )


def _stage(app: Path, staging_dir: Path) -> str:
    invoice, parcels = expand_manifest(app)
    write_bundle(invoice, parcels, staging_dir)
    logger.info("staged bundle %s in %s", invoice.bundle_id, staging_dir)
    return invoice.bundle_id


@rivetcommand(name="prepare", group="publish")
class PublishPrepareCommand(RivetAbstractCommand):
    """Create a standalone bundle for subsequent publication."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        _add_app_file_argument(parser)
        parser.add_argument(
            "-d",
            "--staging-dir",
            dest="staging_dir",
            type=Path,
            required=True,
            metavar="STAGING_DIR",
            help="Path to create the standalone bundle in.",
        )

    def run(self, args: Namespace) -> int:
        try:
            bundle_id = _stage(args.app, args.staging_dir)
        except PublishError as exc:
            print(f"Failed to prepare bundle from '{args.app}': {exc}", file=sys.stderr)
            return 1

        full_dest = args.staging_dir.resolve()
        print(f"id:      {bundle_id}")
        print(f"command: bindle push -p {full_dest} {bundle_id}")
        return 0


@rivetcommand(name="push", group="publish")
class PublishPushCommand(RivetAbstractCommand):
    """Publish an application as a bundle."""

    @classmethod
    def configure(cls, parser: ArgumentParser) -> None:
        _add_app_file_argument(parser)
        parser.add_argument(
            "-d",
            "--staging-dir",
            dest="staging_dir",
            type=Path,
            default=None,
            metavar="STAGING_DIR",
            help="Path to assemble the bundle before pushing (defaults to a temporary directory).",
        )
        parser.add_argument(
            "--bundle-server",
            dest="bundle_server_url",
            default=None,
            metavar="BINDLE_SERVER_URL",
            help=f"URL of the bundle server (default: ${SERVER_URL_ENV}).",
        )

    def run(self, args: Namespace) -> int:
        server_url = args.bundle_server_url or self.context.environ.get(SERVER_URL_ENV)
        if not server_url:
            print(
                f"A bundle server is required: pass --bundle-server or set {SERVER_URL_ENV}.",
                file=sys.stderr,
            )
            return 1

        try:
            if args.staging_dir is not None:
                bundle_id = self._publish(args.app, args.staging_dir, server_url)
            else:
                with tempfile.TemporaryDirectory(prefix="rivet-bundle-") as temp_dir:
                    bundle_id = self._publish(args.app, Path(temp_dir), server_url)
        except PublishError as exc:
            print(f"Failed to push bundle from '{args.app}': {exc}", file=sys.stderr)
            return 1

        print(f"pushed: {bundle_id}")
        return 0

    def _publish(self, app: Path, staging_dir: Path, server_url: str) -> str:
        bundle_id = _stage(app, staging_dir)
        BundleClient(environ=self.context.environ).push(staging_dir, bundle_id, server_url)
        return bundle_id
