"""
Command-line entry point.

Usage:
    directupload upload cover.png                  # one file, prints its reference
    directupload upload a.png b.jpg c.webp         # batch, one line per file
    directupload upload cover.png --name cover.png --token <access token>
    directupload serve --port 8000                 # development presign backend
"""
import argparse
import asyncio
import sys
from typing import Optional, Sequence

from directupload.config import Settings, settings
from directupload.errors import LocalReadFailed
from directupload.models.upload import LocalFile
from directupload.services.upload_service import UploadOrchestrator
from directupload.utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="directupload",
        description="Upload files directly to object storage through presigned URLs"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    upload = subparsers.add_parser("upload", help="Upload one or more files")
    upload.add_argument("files", nargs="+", help="Files to upload")
    upload.add_argument("--name", help="Target file name (single file only)")
    upload.add_argument("--token", help="Access token for the presign backend")
    upload.add_argument("--api-url", help="Presign backend base URL")
    upload.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip client-side validation for batch uploads (legacy behaviour)"
    )

    serve = subparsers.add_parser("serve", help="Run the development presign backend")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser


def _settings_for(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.token:
        overrides["access_token"] = args.token
    if args.api_url:
        overrides["api_base_url"] = args.api_url
    if args.no_validate:
        overrides["validate_batch_uploads"] = False
    return settings.model_copy(update=overrides)


async def _upload(args: argparse.Namespace) -> int:
    try:
        files = [LocalFile.from_path(path) for path in args.files]
    except LocalReadFailed as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    async with UploadOrchestrator(settings=_settings_for(args)) as orchestrator:
        if len(files) == 1:
            reference = await orchestrator.upload_file(files[0], args.name)
            if reference is None:
                print(f"ERROR: {orchestrator.last_error}", file=sys.stderr)
                return 1
            print(reference)
            return 0

        batch = await orchestrator.upload_batch(files)
        for outcome in batch.outcomes:
            if outcome.succeeded:
                print(outcome.storage_reference)
            else:
                print(f"ERROR: {args.files[outcome.index]}: {outcome.error_message}", file=sys.stderr)
        return 0 if batch.all_succeeded else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "upload" and args.name and len(args.files) > 1:
        parser.error("--name can only be used with a single file")

    configure_logging(settings.service_name, settings.log_level)

    if args.command == "serve":
        import uvicorn
        uvicorn.run("directupload.main:app", host=args.host, port=args.port)
        return 0

    return asyncio.run(_upload(args))


if __name__ == "__main__":
    sys.exit(main())
