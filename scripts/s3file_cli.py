#!/usr/bin/env python3
"""Command line access to files in S3-compatible storage.

Usage:
  .venv/bin/python scripts/s3file_cli.py exists --bucket b --prefix logs --filename a.txt
  .venv/bin/python scripts/s3file_cli.py get --bucket b --prefix logs --filename a.txt --output a.txt
  .venv/bin/python scripts/s3file_cli.py put --bucket b --prefix logs --filename a.txt --local-file ./a.txt
  .venv/bin/python scripts/s3file_cli.py rm --bucket b --prefix logs --filename a.txt

Region, endpoint, default part size and concurrency are read from the
environment (AWS_REGION, S3_ENDPOINT_URL, S3FILE_*).
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from s3file.common.config import get_settings
from s3file.common.logging import setup_logging
from s3file.domain.requests import FileRequest, PutFileRequest
from s3file.infra.storage.client import StorageError
from s3file.services.base import AbortFailedError, UploadError
from s3file.services.file_service import FileService


def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--bucket", required=True, help="Bucket name")
    parser.add_argument("--prefix", default="", help="Key prefix (default: none)")
    parser.add_argument("--filename", required=True, help="Object name under prefix")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage files in S3 storage")
    parser.add_argument(
        "--log-level", default="WARNING", help="Log level (default: WARNING)"
    )
    parser.add_argument(
        "--plain-logs",
        action="store_true",
        help="Log plain text instead of JSON lines",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    exists = commands.add_parser("exists", help="Check whether a file exists")
    _add_target_arguments(exists)

    get = commands.add_parser("get", help="Download a file")
    _add_target_arguments(get)
    get.add_argument(
        "--output", default="-", help="Output path, '-' for stdout (default)"
    )

    put = commands.add_parser("put", help="Upload a file with a multipart upload")
    _add_target_arguments(put)
    put.add_argument("--local-file", required=True, help="Path of the file to send")
    put.add_argument(
        "--part-size",
        type=int,
        default=None,
        help="Part size in bytes (minimum 5 MiB, default from settings)",
    )
    put.add_argument("--content-type", default=None, help="Content type of the object")

    rm = commands.add_parser("rm", help="Remove a file")
    _add_target_arguments(rm)
    return parser


def run(argv: Sequence[str] | None = None, *, service: FileService | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, json_output=not args.plain_logs)
    try:
        service = service or FileService(settings=get_settings())
        target = FileRequest(
            bucket=args.bucket, prefix=args.prefix, filename=args.filename
        )
        if args.command == "exists":
            found = service.file_exists(target)
            print("true" if found else "false")
            return 0 if found else 1
        if args.command == "get":
            content = service.get_file(target)
            if args.output == "-":
                sys.stdout.buffer.write(content)
                sys.stdout.buffer.flush()
            else:
                with open(args.output, "wb") as handle:
                    handle.write(content)
            return 0
        if args.command == "put":
            summary = service.put_file(
                PutFileRequest(
                    bucket=args.bucket,
                    prefix=args.prefix,
                    filename=args.filename,
                    local_file=args.local_file,
                    part_size=args.part_size,
                    content_type=args.content_type,
                )
            )
            print(
                f"Uploaded {summary.size_bytes} bytes to "
                f"{summary.bucket}/{summary.object_key} in {summary.parts} parts"
            )
            return 0
        service.remove_file(target)
        print(f"Removed {target.bucket}/{target.object_key}")
        return 0
    except AbortFailedError as exc:
        print(f"[FATAL] {exc}", file=sys.stderr)
        return 1
    except (UploadError, StorageError, OSError, ValueError) as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
